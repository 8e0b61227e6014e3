"""Data models for ledger processing."""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, NamedTuple


@dataclass(frozen=True)
class Record:
    """One parsed ledger line."""
    date: date
    source: str
    amount: Decimal
    note: str
    line_number: int = 0


class MonthKey(NamedTuple):
    """Calendar month bucket. Orders as a (year, month) integer pair."""
    year: int
    month: int

    @classmethod
    def from_date(cls, value: date) -> "MonthKey":
        return cls(value.year, value.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass
class SourceTotal:
    """Accumulated amount for one source."""
    name: str
    amount: Decimal


@dataclass
class LedgerSummary:
    """Aggregated ledger data."""
    records: List[Record]
    total: Decimal = Decimal("0")
    by_source: Dict[str, Decimal] = field(default_factory=dict)  # source -> amount
    by_month: Dict[MonthKey, Decimal] = field(default_factory=dict)  # month -> amount
    by_month_source: Dict[MonthKey, Dict[str, Decimal]] = field(default_factory=dict)
