"""Shared pytest fixtures for all tests."""

import pytest

from auth import AccessPolicy
from bot.pipeline import Pipeline
from config import Config
from models.expense import Expense
from services.memory_ledger import MemoryLedger
from services.sqlite_ledger import SQLiteLedger
from tests.helpers import FakeClock, FakeExtractor, FakeLedger, FakeTransport


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration using the in-memory ledger.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "financebot",
        storage_path=None,
        log_level="DEBUG",
        log_dir=tmp_path / "financebot" / "logs",
        telegram_token="123456:TEST-TOKEN",
        openai_api_key="sk-test",
        openai_model="gpt-4o-mini",
        authorized_users=["alice"],
    )


@pytest.fixture
def clock():
    """A fixed clock at 2024-05-15 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def memory_ledger(clock):
    """In-memory ledger stamped by the fake clock."""
    return MemoryLedger(clock=clock)


@pytest.fixture
def sqlite_ledger(tmp_path, clock):
    """SQLite ledger in a temporary file, closed after the test.

    Yields:
        SQLiteLedger: Open ledger stamped by the fake clock.
    """
    ledger = SQLiteLedger(tmp_path / "db" / "finance.db", clock=clock)
    yield ledger
    ledger.close()


@pytest.fixture
def lunch():
    return Expense(category="Food", amount=12.34, description="Lunch")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def extractor(lunch):
    return FakeExtractor(expense=lunch)


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def pipeline(transport, extractor, ledger, clock):
    """Pipeline serving only "alice", wired to fakes."""
    return Pipeline(transport, AccessPolicy(["alice"]), extractor, ledger, clock=clock)
