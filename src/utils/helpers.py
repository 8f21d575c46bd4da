from typing import List, Optional
import discord

DISCORD_MAX_LENGTH = 2000


def chunk_message(message: str, max_length: int = DISCORD_MAX_LENGTH) -> List[str]:
    """
    Split a message on line boundaries into pieces no longer than max_length.
    Lines that are themselves too long are cut hard.
    """
    if len(message) <= max_length:
        return [message]

    chunks = []

    def flush(text: str) -> None:
        # Discord rejects empty messages
        text = text.rstrip('\n')
        if text:
            chunks.append(text)

    current = ""
    for line in message.split('\n'):
        while len(line) > max_length:
            flush(current)
            current = ""
            chunks.append(line[:max_length])
            line = line[max_length:]

        if len(current) + len(line) + 1 <= max_length:
            current += line + '\n'
        else:
            flush(current)
            current = line + '\n'

    flush(current)
    return chunks


async def send_chunked_message(channel: discord.abc.Messageable, message: str,
                               reference: Optional[discord.Message] = None):
    """
    Sends a message in chunks if it exceeds Discord's character limit.
    Only the first chunk replies to the reference message.
    """
    chunks = chunk_message(message)
    await channel.send(chunks[0], reference=reference)
    for chunk in chunks[1:]:
        await channel.send(chunk)
