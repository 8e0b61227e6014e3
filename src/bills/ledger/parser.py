"""Ledger file parsing.

Ledger lines look like::

    YYYY-MM-DD,Store 123,10.00,Note about this

There is no header row and no quoting, so a comma inside the source or note
splits the line into too many fields and is rejected.
"""
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, List, Union
from zoneinfo import ZoneInfo

from .models import Record
from bills.utils.logger import get_logger
from bills.utils.exceptions import LedgerIOError, ParseError

logger = get_logger()

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)

# Amounts are kept within what a float64 holds exactly
MAX_AMOUNT_EXPONENT = 15


class LedgerParser:
    """Parses ledger lines into records. Any malformed line aborts the parse."""

    DATE_FORMAT = "%Y-%m-%d"
    FIELD_COUNT = 4

    def read_file(self, path: Union[str, Path]) -> List[Record]:
        """
        Read and parse a ledger file.

        Args:
            path: Ledger file path

        Returns:
            Records in file order
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                records = self.parse_lines(f)
        except OSError as e:
            raise LedgerIOError(f"Unable to open: {path}: {e}")
        except UnicodeDecodeError as e:
            raise LedgerIOError(f"Unable to read: {path}: {e}")

        logger.debug(f"Read {len(records)} records from {path}")
        return records

    def parse_lines(self, lines: Iterable[str]) -> List[Record]:
        """Parse raw lines, numbering them from 1."""
        return [
            self.parse_line(line, line_number)
            for line_number, line in enumerate(lines, start=1)
        ]

    def parse_line(self, line: str, line_number: int = 0) -> Record:
        """
        Parse a single ledger line.

        Args:
            line: Raw line, with or without its line ending
            line_number: Position in the input, used in error messages

        Returns:
            Record
        """
        line = line.rstrip("\r\n")
        pieces = line.split(",")
        if len(pieces) != self.FIELD_COUNT:
            raise ParseError(
                f"Line {line_number} missing expected number of fields: {line}",
                line_number=line_number,
                value=line
            )

        date_text, source, amount_text, note = pieces
        return Record(
            date=self._parse_date(date_text, line_number),
            source=source,
            amount=self._parse_amount(amount_text, line_number),
            note=note,
            line_number=line_number
        )

    def _parse_date(self, text: str, line_number: int) -> date:
        if DATE_PATTERN.fullmatch(text):
            try:
                return datetime.strptime(text, self.DATE_FORMAT).date()
            except ValueError:
                pass
        raise ParseError(
            f"Line {line_number}: unable to parse date: {text}",
            line_number=line_number,
            value=text
        )

    def _parse_amount(self, text: str, line_number: int) -> Decimal:
        amount = None
        if AMOUNT_PATTERN.fullmatch(text):
            try:
                amount = Decimal(text)
            except InvalidOperation:
                pass

        if amount is None or (amount and abs(amount.adjusted()) > MAX_AMOUNT_EXPONENT):
            raise ParseError(
                f"Line {line_number}: unable to parse amount: {text}",
                line_number=line_number,
                value=text
            )
        return amount


def today_in(zone: ZoneInfo) -> date:
    """Current calendar date in the given time zone."""
    return datetime.now(zone).date()


def cutoff_date(today: date, days_back: int) -> date:
    """Earliest date kept by the recency filter."""
    return today - timedelta(days=days_back)


def filter_recent(records: Iterable[Record], cutoff: date) -> List[Record]:
    """Drop records dated strictly before the cutoff, keeping input order."""
    logger.info(f"Ignoring any entries < {cutoff.isoformat()}")
    records = list(records)
    kept = [record for record in records if record.date >= cutoff]
    logger.debug(f"Dropped {len(records) - len(kept)} records older than {cutoff.isoformat()}")
    return kept
