"""Base services container for dependency injection."""

from typing import Optional
from config import Config
from services.ledger import Ledger
from services.memory_ledger import MemoryLedger
from services.sqlite_ledger import SQLiteLedger


class Services:
    """Container for the collaborators the bot pipeline needs.

    This class provides a centralized way to build the ledger from config and
    makes it easy to inject fakes for testing.

    Args:
        config: Application configuration object.
        ledger: Optional ledger for testing. If None, built from config:
                SQLite when a storage path is set, in-memory otherwise.
    """

    def __init__(self, config: Config, ledger: Optional[Ledger] = None):
        self.config = config

        if ledger is not None:
            self.ledger = ledger
        elif config.storage_path:
            self.ledger = SQLiteLedger(config.storage_path)
        else:
            self.ledger = MemoryLedger()

    def close(self) -> None:
        """Release the ledger."""
        self.ledger.close()
