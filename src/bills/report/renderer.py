"""Plain-text report rendering."""
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from bills.ledger.models import Record, MonthKey, SourceTotal, LedgerSummary
from bills.utils.logger import get_report_logger

SEPARATOR = "----"


def format_amount(amount: Decimal) -> str:
    return f"{amount:.2f}"


def sort_records(records: List[Record]) -> List[Record]:
    """Records by date ascending. Stable, so same-day records keep input order."""
    return sorted(records, key=lambda record: record.date)


def sort_source_totals(totals: Dict[str, Decimal]) -> List[SourceTotal]:
    """Source totals by amount descending, equal amounts by name."""
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [SourceTotal(name=name, amount=amount) for name, amount in ordered]


def sort_months(totals: Dict[MonthKey, Decimal]) -> List[Tuple[MonthKey, Decimal]]:
    """Month totals in calendar order."""
    return sorted(totals.items(), key=lambda item: (item[0].year, item[0].month))


class ReportRenderer:
    """Builds the report text and writes it through the report logger."""

    def __init__(self, show_records: bool = True, report_logger: Optional[logging.Logger] = None):
        self.show_records = show_records
        self.report_logger = report_logger or get_report_logger()

    def render(self, summary: LedgerSummary) -> List[str]:
        """
        Build the report lines.

        Args:
            summary: Aggregated ledger data

        Returns:
            Report lines without line endings
        """
        sections = [
            self._render_costs(summary),
            self._render_grouped(summary),
            self._render_monthly(summary),
            self._render_monthly_by_source(summary),
        ]

        lines: List[str] = []
        for index, section in enumerate(sections):
            if index:
                lines.extend(["", SEPARATOR, ""])
            lines.extend(section)
        return lines

    def emit(self, summary: LedgerSummary) -> None:
        """Render the report and write it line by line."""
        for line in self.render(summary):
            self.report_logger.info(line)

    def _render_costs(self, summary: LedgerSummary) -> List[str]:
        lines = []
        if self.show_records:
            lines.append("Costs:")
            for record in sort_records(summary.records):
                lines.append(
                    f"{record.date.isoformat()} {record.source}: {format_amount(record.amount)}"
                )
            lines.append("")
        lines.append(f"Total: {format_amount(summary.total)}")
        return lines

    def _render_grouped(self, summary: LedgerSummary) -> List[str]:
        lines = ["Grouped costs:"]
        for source_total in sort_source_totals(summary.by_source):
            lines.append(f"{source_total.name}: {format_amount(source_total.amount)}")
        return lines

    def _render_monthly(self, summary: LedgerSummary) -> List[str]:
        lines = ["Monthly costs:"]
        for month, amount in sort_months(summary.by_month):
            lines.append(f"{month}: {format_amount(amount)}")
        return lines

    def _render_monthly_by_source(self, summary: LedgerSummary) -> List[str]:
        lines = ["Monthly costs by source:"]
        for month, _ in sort_months(summary.by_month):
            lines.append(str(month))
            for source_total in sort_source_totals(summary.by_month_source.get(month, {})):
                lines.append(f"  {source_total.name}: {format_amount(source_total.amount)}")
        return lines
