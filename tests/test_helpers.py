import unittest
from unittest.mock import AsyncMock, MagicMock
from utils.helpers import chunk_message, send_chunked_message


class TestChunkMessage(unittest.TestCase):

    def test_short_message_untouched(self):
        self.assertEqual(chunk_message("hello"), ["hello"])

    def test_splits_on_lines(self):
        message = "\n".join(["a" * 6] * 5)
        chunks = chunk_message(message, max_length=15)
        self.assertEqual(chunks, ["aaaaaa\naaaaaa", "aaaaaa\naaaaaa", "aaaaaa"])
        self.assertTrue(all(len(c) <= 15 for c in chunks))

    def test_no_empty_chunks(self):
        message = "a" * 10 + "\n\n" + "b" * 10
        chunks = chunk_message(message, max_length=10)
        self.assertEqual(chunks, ["a" * 10, "b" * 10])

    def test_long_line_cut(self):
        chunks = chunk_message("b" * 25, max_length=10)
        self.assertEqual(chunks, ["b" * 10, "b" * 10, "b" * 5])


class TestSendChunkedMessage(unittest.IsolatedAsyncioTestCase):

    async def test_only_first_chunk_replies(self):
        channel = MagicMock()
        channel.send = AsyncMock()
        reference = object()

        await send_chunked_message(channel, "x" * 2500, reference=reference)

        self.assertEqual(channel.send.await_count, 2)
        first, second = channel.send.await_args_list
        self.assertIs(first.kwargs["reference"], reference)
        self.assertEqual(len(first.args[0]), 2000)
        self.assertEqual(second.args[0], "x" * 500)
        self.assertNotIn("reference", second.kwargs)


if __name__ == '__main__':
    unittest.main()
