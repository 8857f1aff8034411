"""Aggregation and report package."""

from finanztracker.queries.aggregation import (
    available_years,
    category_breakdown,
    chart_series,
    compute_totals,
    filter_by_period,
    sort_for_display,
)
from finanztracker.queries.report import (
    build_period_report,
    format_amount,
    format_summary,
)

__all__ = [
    "available_years",
    "build_period_report",
    "category_breakdown",
    "chart_series",
    "compute_totals",
    "filter_by_period",
    "format_amount",
    "format_summary",
    "sort_for_display",
]
