"""In-memory ledger, useful for development and testing."""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from models.expense import Expense, Summary
from services.ledger import Clock, Ledger, to_utc, utc_now, validate


@dataclass(frozen=True)
class _Entry:
    expense: Expense
    created_at: datetime


class MemoryLedger(Ledger):
    """Keeps expenses in a list guarded by a lock.

    Args:
        clock: Returns the insertion timestamp. Defaults to the UTC wall clock.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or utc_now
        self._lock = threading.Lock()
        self._entries: List[_Entry] = []

    def insert(self, expense: Expense) -> None:
        validate(expense)
        with self._lock:
            self._entries.append(_Entry(expense, to_utc(self._clock())))

    def aggregate(self, since: datetime) -> Summary:
        since = to_utc(since)
        summary = Summary()

        with self._lock:
            for entry in self._entries:
                if entry.created_at < since:
                    continue
                amount = entry.expense.amount
                summary.total_count += 1
                summary.total_amount += amount
                category = entry.expense.category
                summary.category_totals[category] = (
                    summary.category_totals.get(category, 0.0) + amount
                )

        return summary

    def items(self) -> List[Expense]:
        """Return a copy of all stored expenses, oldest first."""
        with self._lock:
            return [entry.expense for entry in self._entries]

    def close(self) -> None:
        # Nothing to release
        pass
