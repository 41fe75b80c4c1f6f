"""Reply texts sent back to the chat."""

from datetime import datetime
from typing import Dict, List, Tuple
from models.expense import Summary

ADD_USAGE = "Send an expense description after /add, e.g. `/add Coffee $3.50`."
NO_EXPENSES = "No expenses recorded in the last 7 days."
UNCATEGORIZED = "Uncategorized"


def sorted_category_totals(summary: Summary) -> List[Tuple[str, float]]:
    """Category totals by amount descending, then name ascending.

    The empty-category bucket is listed as ``Uncategorized``, merged with a
    category the model itself named that way, so each label appears once.
    """
    totals: Dict[str, float] = {}
    for name, total in summary.category_totals.items():
        label = name or UNCATEGORIZED
        totals[label] = totals.get(label, 0.0) + total
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def format_summary(summary: Summary, since: datetime, days: int = 7) -> str:
    """Render a window summary for the chat.

    Args:
        summary: Aggregate to render.
        since: Start of the window; only its date is shown.
        days: Window length named in the header.

    Returns:
        Multi-line text without a trailing newline.
    """
    lines = [
        f"Last {days} days (since {since.strftime('%Y-%m-%d')}):",
        f"Total: ${summary.total_amount:.2f} across {summary.total_count} expenses",
    ]

    totals = sorted_category_totals(summary)
    if totals:
        lines.append("By category:")
        for name, total in totals:
            lines.append(f"- {name}: ${total:.2f}")

    return "\n".join(lines)
