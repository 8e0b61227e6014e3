"""Ledger aggregation module."""
from decimal import Decimal
from collections import defaultdict
from typing import List

from .models import Record, MonthKey, LedgerSummary
from bills.utils.logger import get_logger

logger = get_logger()


class Aggregator:
    """Aggregates records by source and month."""

    def aggregate(self, records: List[Record]) -> LedgerSummary:
        """
        Aggregate records into a grand total and the source/month groupings.

        Args:
            records: Parsed (and filtered) records

        Returns:
            LedgerSummary object
        """
        if not records:
            logger.warning("No entries to report")

        total = Decimal("0")
        by_source = defaultdict(Decimal)
        by_month = defaultdict(Decimal)
        by_month_source = defaultdict(lambda: defaultdict(Decimal))

        for record in records:
            month = MonthKey.from_date(record.date)
            total += record.amount
            by_source[record.source] += record.amount
            by_month[month] += record.amount
            by_month_source[month][record.source] += record.amount

        summary = LedgerSummary(
            records=list(records),
            total=total,
            by_source=dict(by_source),
            by_month=dict(by_month),
            by_month_source={month: dict(sources) for month, sources in by_month_source.items()}
        )

        logger.debug(
            f"Aggregated {len(records)} records into {len(by_source)} sources "
            f"over {len(by_month)} months"
        )

        return summary
