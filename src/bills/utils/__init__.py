"""Utility modules."""
from .logger import configure_logging, get_logger, get_report_logger, set_ledger_context
from .exceptions import (
    BillsError,
    ConfigError,
    LedgerIOError,
    ParseError
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_report_logger",
    "set_ledger_context",
    "BillsError",
    "ConfigError",
    "LedgerIOError",
    "ParseError"
]
