import asyncio
import logging
import discord
from dotenv import load_dotenv
from bot import CountdownBot
from config.config import Config


async def main():
    # Load environment variables
    load_dotenv()

    config = Config()

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.info("Discord.py Version: %s", discord.__version__)
    bot = CountdownBot(config)
    async with bot:
        await bot.start(config.discord_token)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
