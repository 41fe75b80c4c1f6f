"""Tests for the services container."""

from services.base import Services
from services.memory_ledger import MemoryLedger
from services.sqlite_ledger import SQLiteLedger
from tests.helpers import FakeLedger


class TestServices:
    """Tests for Services."""

    def test_memory_ledger_without_path(self, test_config):
        services = Services(test_config)

        assert isinstance(services.ledger, MemoryLedger)

    def test_sqlite_ledger_with_path(self, test_config, tmp_path):
        test_config.storage_path = tmp_path / "db" / "finance.db"

        services = Services(test_config)
        try:
            assert isinstance(services.ledger, SQLiteLedger)
            assert test_config.storage_path.exists()
        finally:
            services.close()

    def test_injected_ledger(self, test_config):
        ledger = FakeLedger()

        services = Services(test_config, ledger=ledger)
        services.close()

        assert services.ledger is ledger
        assert ledger.close_calls == 1
