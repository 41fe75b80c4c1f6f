"""Per-message processing: authorization, routing, and replies.

Every inbound message produces at most one reply. Free text and ``/add <text>``
are classified into an expense and stored; ``/stats`` summarizes the last
seven days. Senders outside the access policy get no reply at all, so the bot
does not reveal itself to strangers.
"""

import asyncio
from datetime import datetime, timedelta
from typing import AsyncIterable, Callable, Optional
from auth import AccessPolicy
from bot.messages import InboundMessage
from bot.replies import ADD_USAGE, NO_EXPENSES, format_summary
from bot.transport import Transport
from errors import ClassificationError, LedgerError, TransportSendError
from llm.providers.base import ExpenseExtractor
from logger import get_logger
from services.ledger import Ledger, utc_now

logger = get_logger()

STATS_DAYS = 7


class Pipeline:
    """Routes chat messages to the extractor and the ledger.

    Args:
        transport: Where replies are sent.
        policy: Decides which senders are served.
        extractor: Turns free text into an expense.
        ledger: Stores expenses and answers window summaries.
        clock: Current time for the stats window. Defaults to the UTC wall clock.
    """

    def __init__(
        self,
        transport: Transport,
        policy: AccessPolicy,
        extractor: ExpenseExtractor,
        ledger: Ledger,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.transport = transport
        self.policy = policy
        self.extractor = extractor
        self.ledger = ledger
        self._clock = clock or utc_now

    async def run(
        self,
        messages: AsyncIterable[InboundMessage],
        stop: Optional[asyncio.Event] = None,
    ) -> None:
        """Handle messages one at a time until the source ends or stop is set.

        The stop event is checked before each message is pulled from the
        source, never mid-message, so no message is taken and then dropped.
        """
        iterator = aiter(messages)
        while stop is None or not stop.is_set():
            try:
                message = await anext(iterator)
            except StopAsyncIteration:
                return
            await self.handle(message)
        logger.info("Stop requested, leaving dispatch loop")

    async def handle(self, message: InboundMessage) -> Optional[str]:
        """Process one message and send its reply, if any.

        Returns:
            The reply text, or None when the message was dropped.
        """
        reply = await self._dispatch(message)
        if reply is not None:
            await self._send(message.chat_id, reply)
        return reply

    async def _dispatch(self, message: InboundMessage) -> Optional[str]:
        if message.sender is None:
            logger.info("Skipping message without sender")
            return None

        if not self.policy.is_allowed(message.sender):
            logger.debug(f"Ignoring message from unauthorized sender {message.sender!r}")
            return None

        if message.is_command:
            return await self._handle_command(message)

        return await self._record_expense(message.sender, message.text)

    async def _handle_command(self, message: InboundMessage) -> str:
        if message.command == "add":
            if not message.command_args:
                return ADD_USAGE
            return await self._record_expense(message.sender, message.command_args)

        if message.command == "stats":
            return await self._stats()

        return f"Unknown command: /{message.command}"

    async def _record_expense(self, sender: str, text: str) -> str:
        logger.info(f"[{sender}] {text}")

        try:
            expense = await self.extractor.extract(text)
        except ClassificationError as e:
            logger.warning(f"Extraction failed for [{sender}]: {e}")
            return f"Error: {e}"

        try:
            await asyncio.to_thread(self.ledger.insert, expense)
        except LedgerError as e:
            logger.error(f"Failed to store expense {expense}: {e}")
            return f"Failed to store expense: {e}"

        logger.info(
            f"Stored expense: {expense.description} ({expense.category}) {expense.amount:.2f}"
        )
        return expense.reply_message()

    async def _stats(self) -> str:
        since = self._clock() - timedelta(days=STATS_DAYS)

        try:
            summary = await asyncio.to_thread(self.ledger.aggregate, since)
        except LedgerError as e:
            logger.error(f"Failed to load stats: {e}")
            return f"Failed to load stats: {e}"

        if summary.total_count == 0:
            return NO_EXPENSES

        return format_summary(summary, since, STATS_DAYS)

    async def _send(self, chat_id: int, text: str) -> None:
        try:
            await self.transport.send_text(chat_id, text)
        except TransportSendError as e:
            logger.error(f"Failed to send message: {e}")
