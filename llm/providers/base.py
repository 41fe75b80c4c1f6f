"""Base provider interface for expense extraction."""

from abc import ABC, abstractmethod
from models.expense import Expense


class ExpenseExtractor(ABC):
    """Abstract base class for services that turn free text into an expense.

    Implementations make a single attempt and never retry; the caller decides
    how to surface a failure.
    """

    @abstractmethod
    async def extract(self, text: str) -> Expense:
        """Classify a free-form expense description.

        Args:
            text: Raw message text, e.g. "Coffee $3.50".

        Returns:
            The extracted Expense.

        Raises:
            ClassificationError: If the backend call fails or its answer
                cannot be read as an expense.
        """
        pass
