"""Ledger parsing and aggregation module."""
from .models import Record, MonthKey, SourceTotal, LedgerSummary
from .parser import LedgerParser, cutoff_date, filter_recent
from .aggregator import Aggregator

__all__ = [
    "Record",
    "MonthKey",
    "SourceTotal",
    "LedgerSummary",
    "LedgerParser",
    "cutoff_date",
    "filter_recent",
    "Aggregator"
]
