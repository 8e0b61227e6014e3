"""Expense ledger report."""

__version__ = "0.1.0"
