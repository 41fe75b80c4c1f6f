"""Expense and summary models."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class Expense:
    """A single categorized expense produced by the extractor.

    Attributes:
        category: Category name chosen by the model (may be empty).
        amount: Amount as emitted by the model; zero and negative are allowed.
        description: Short description; must be non-empty to be stored.
    """

    category: str
    amount: float
    description: str

    def reply_message(self) -> str:
        """Format the chat confirmation for a stored expense."""
        return (
            f"Recorded\n"
            f"Description: {self.description}\n"
            f"Category: {self.category}\n"
            f"Amount: ${self.amount:.2f}"
        )


@dataclass
class Summary:
    """Aggregate expense data over a time window."""

    total_count: int = 0
    total_amount: float = 0.0
    category_totals: Dict[str, float] = field(default_factory=dict)
