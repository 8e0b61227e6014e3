"""Custom exception classes for the bills report."""
from typing import Optional


class BillsError(Exception):
    """Base exception for the bills report."""
    pass


class ConfigError(BillsError):
    """Settings and argument errors."""
    pass


class LedgerIOError(BillsError):
    """Ledger file could not be opened or read."""
    pass


class ParseError(BillsError):
    """A ledger line could not be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None, value: Optional[str] = None):
        super().__init__(message)
        self.line_number = line_number
        self.value = value
