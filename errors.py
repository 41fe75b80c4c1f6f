"""Custom exception classes for FinanceBot."""


class FinanceBotError(Exception):
    """Base exception for FinanceBot."""

    pass


class ConfigError(FinanceBotError):
    """Missing or invalid configuration."""

    pass


class ClassificationError(FinanceBotError):
    """The language model could not turn text into an expense."""

    pass


class LedgerError(FinanceBotError):
    """Base class for expense storage errors."""

    pass


class ValidationError(LedgerError):
    """Expense rejected before any write."""

    pass


class PersistenceError(LedgerError):
    """Storage I/O failure."""

    pass


class TransportSendError(FinanceBotError):
    """A reply could not be delivered to the chat."""

    pass
