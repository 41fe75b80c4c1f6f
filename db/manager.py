"""Database manager for SQLite connections and schema setup."""

import sqlite3
from pathlib import Path
from typing import Union


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "migrations"


class DatabaseManager:
    """Manages the expense database file and its schema.

    Args:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: Union[str, Path]):
        if not str(db_path):
            raise ValueError("sqlite: database path is required")
        self.db_path = Path(db_path)

    def open(self) -> sqlite3.Connection:
        """Open a long-lived connection with the schema applied.

        The connection may be used from worker threads; callers serialize
        access themselves.

        Returns:
            sqlite3.Connection: Open database connection.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        try:
            self.apply_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def apply_schema(self, conn: sqlite3.Connection) -> None:
        """Run the initial-schema scripts in order.

        Every script is idempotent (CREATE ... IF NOT EXISTS).
        """
        for migration_file in sorted(get_migrations_dir().glob("*.sql")):
            conn.executescript(migration_file.read_text())
        conn.commit()

    def get_db_path(self) -> Path:
        """Get the current database path."""
        return self.db_path
