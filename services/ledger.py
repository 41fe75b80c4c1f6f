"""Expense ledger interface shared by the storage backends.

A ledger is an append-only log of expenses, each stamped with the UTC time it
was inserted. Besides inserting, it can summarize every expense created at or
after a given instant.

Empty categories are kept: such expenses count toward the totals and are
summed under the "" key of ``Summary.category_totals``, in every backend.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable
from errors import ValidationError
from models.expense import Expense, Summary

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate(expense: Expense) -> None:
    """Reject expenses that may not be stored.

    Raises:
        ValidationError: If the description is empty.
    """
    if not expense.description:
        raise ValidationError("expense description cannot be empty")


class Ledger(ABC):
    """Abstract base class for expense stores."""

    @abstractmethod
    def insert(self, expense: Expense) -> None:
        """Validate and append an expense, stamping it with the current time.

        Raises:
            ValidationError: If the expense is rejected before writing.
            PersistenceError: If the storage write fails.
        """
        pass

    @abstractmethod
    def aggregate(self, since: datetime) -> Summary:
        """Summarize every expense with created_at >= since."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release held resources. Safe to call more than once."""
        pass
