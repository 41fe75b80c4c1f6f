"""Console transport for running the pipeline over stdin/stdout."""

import asyncio
import sys
from typing import AsyncIterator, Optional, TextIO
from bot.messages import InboundMessage, from_text
from bot.transport import Transport
from errors import TransportSendError

CONSOLE_CHAT_ID = 0


class ConsoleTransport(Transport):
    """Writes replies to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    async def send_text(self, chat_id: int, text: str) -> None:
        try:
            self.stream.write(text + "\n")
            self.stream.flush()
        except OSError as e:
            raise TransportSendError(str(e)) from e


async def read_messages(
    sender: str, stream: Optional[TextIO] = None
) -> AsyncIterator[InboundMessage]:
    """Yield one message per non-blank input line until end of input.

    Lines starting with "/" are commands.
    """
    stream = stream or sys.stdin
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            return
        text = line.strip()
        if text:
            yield from_text(sender, CONSOLE_CHAT_ID, text)
