"""SQLite-backed ledger persisting expenses in a local database file."""

import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Union
from db.manager import DatabaseManager
from errors import PersistenceError
from logger import get_logger
from models.expense import Expense, Summary
from services.ledger import Clock, Ledger, to_utc, utc_now, validate

logger = get_logger()

# Fixed-width UTC text, so string comparison matches time order
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

_INSERT_EXPENSE = """
    INSERT INTO expenses (category, amount, description, created_at)
    VALUES (?, ?, ?, ?)
"""

_AGGREGATE_SINCE = """
    SELECT COALESCE(category, ''), COUNT(*), COALESCE(SUM(amount), 0)
    FROM expenses
    WHERE created_at >= ?
    GROUP BY COALESCE(category, '')
"""


def format_timestamp(value: datetime) -> str:
    """Render a datetime the way created_at is stored."""
    return to_utc(value).strftime(_TIMESTAMP_FORMAT)


class SQLiteLedger(Ledger):
    """Stores expenses in the ``expenses`` table of a SQLite file.

    One connection is held for the ledger's lifetime; a lock serializes every
    insert and aggregate on it.

    Args:
        db_path: Database file; created (with parent directories) if missing.
        clock: Returns the insertion timestamp. Defaults to the UTC wall clock.

    Raises:
        ValueError: If db_path is empty.
        PersistenceError: If the database cannot be opened.
    """

    def __init__(self, db_path: Union[str, Path], clock: Optional[Clock] = None):
        self.db_manager = DatabaseManager(db_path)
        self._clock = clock or utc_now
        self._lock = threading.Lock()

        try:
            self._conn: Optional[sqlite3.Connection] = self.db_manager.open()
        except sqlite3.Error as e:
            raise PersistenceError(f"sqlite: open {db_path}: {e}") from e

        logger.info(f"Opened expense database at {self.db_manager.get_db_path()}")

    def insert(self, expense: Expense) -> None:
        validate(expense)

        with self._lock:
            conn = self._require_open()
            try:
                conn.execute(
                    _INSERT_EXPENSE,
                    (
                        expense.category,
                        float(expense.amount),
                        expense.description,
                        format_timestamp(self._clock()),
                    ),
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise PersistenceError(f"sqlite: insert expense: {e}") from e

    def aggregate(self, since: datetime) -> Summary:
        summary = Summary()

        with self._lock:
            conn = self._require_open()
            try:
                rows = conn.execute(
                    _AGGREGATE_SINCE, (format_timestamp(since),)
                ).fetchall()
            except sqlite3.Error as e:
                raise PersistenceError(f"sqlite: query stats: {e}") from e

        for category, count, total in rows:
            summary.total_count += count
            summary.total_amount += total
            summary.category_totals[category] = total

        return summary

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("Closed expense database")

    def _require_open(self) -> sqlite3.Connection:
        if self._conn is None:
            raise PersistenceError("sqlite: ledger is closed")
        return self._conn
