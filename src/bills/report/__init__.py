"""Report rendering module."""
from .renderer import ReportRenderer, format_amount, sort_records, sort_source_totals, sort_months

__all__ = ["ReportRenderer", "format_amount", "sort_records", "sort_source_totals", "sort_months"]
