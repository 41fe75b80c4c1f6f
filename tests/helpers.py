"""Helper utilities and fakes for tests."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from bot.transport import Transport
from errors import TransportSendError
from llm.providers.base import ExpenseExtractor
from models.expense import Expense, Summary
from services.ledger import Ledger


class FakeClock:
    """Controllable replacement for the UTC wall clock."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeExtractor(ExpenseExtractor):
    """Returns a canned expense or raises a canned error."""

    def __init__(self, expense: Optional[Expense] = None, error: Optional[Exception] = None):
        self.expense = expense
        self.error = error
        self.requests: List[str] = []

    async def extract(self, text: str) -> Expense:
        self.requests.append(text)
        if self.error is not None:
            raise self.error
        return self.expense


class FakeLedger(Ledger):
    """Records calls; optionally fails inserts or aggregates."""

    def __init__(
        self,
        summary: Optional[Summary] = None,
        insert_error: Optional[Exception] = None,
        aggregate_error: Optional[Exception] = None,
    ):
        self.summary = summary or Summary()
        self.insert_error = insert_error
        self.aggregate_error = aggregate_error
        self.items: List[Expense] = []
        self.aggregate_calls: List[datetime] = []
        self.close_calls = 0

    def insert(self, expense: Expense) -> None:
        if self.insert_error is not None:
            raise self.insert_error
        self.items.append(expense)

    def aggregate(self, since: datetime) -> Summary:
        self.aggregate_calls.append(since)
        if self.aggregate_error is not None:
            raise self.aggregate_error
        return self.summary

    def close(self) -> None:
        self.close_calls += 1


class FakeTransport(Transport):
    """Collects sent messages; optionally fails every send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: List[str] = []
        self.chat_ids: List[int] = []

    async def send_text(self, chat_id: int, text: str) -> None:
        if self.fail:
            raise TransportSendError("network unreachable")
        self.chat_ids.append(chat_id)
        self.messages.append(text)
