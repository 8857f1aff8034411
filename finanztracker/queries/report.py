"""
Period Report Builder

Bundles everything the presentation layer shows for one month: the
sorted transaction list, the headline totals, both category breakdowns,
the chart series and the selectable years.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finanztracker.models.report import PeriodReport
from finanztracker.models.transaction import Period, Transaction, TransactionType
from finanztracker.queries.aggregation import (
    available_years,
    category_breakdown,
    chart_series,
    compute_totals,
    filter_by_period,
    sort_for_display,
)


def build_period_report(
    transactions: Iterable[Transaction],
    period: Period,
    today: Optional[date] = None,
) -> PeriodReport:
    """
    Compute all derived values for a period.

    Args:
        transactions: The full store contents
        period: Month and year to report on
        today: Reference date for the year list
    """
    transactions = list(transactions)
    filtered = sort_for_display(filter_by_period(transactions, period))
    totals = compute_totals(filtered)

    return PeriodReport(
        period=period,
        transactions=filtered,
        totals=totals,
        income_breakdown=category_breakdown(filtered, TransactionType.INCOME, totals.income),
        expense_breakdown=category_breakdown(filtered, TransactionType.EXPENSE, totals.expenses),
        chart_series=chart_series(filtered),
        available_years=available_years(transactions, today),
    )


def format_amount(
    amount: Decimal,
    currency_symbol: str = "€",
    sign: str = "",
) -> str:
    """Two decimals, optional leading sign, trailing currency symbol."""
    return f"{sign}{amount:.2f} {currency_symbol}"


def format_summary(
    report: PeriodReport,
    currency_symbol: str = "€",
) -> str:
    """
    Plain-text version of the period header.

    Expenses are shown without savings; the balance keeps savings
    deducted and carries an explicit sign.
    """
    totals = report.totals
    balance_sign = "+" if totals.balance >= 0 else ""

    lines = [
        report.period.label,
        f"Einnahmen:  {format_amount(totals.income, currency_symbol, '+')}",
        f"Ausgaben:   {format_amount(totals.real_expenses, currency_symbol, '-')}",
        f"Gespart:    {format_amount(totals.savings, currency_symbol)}",
        f"Bilanz:     {format_amount(totals.balance, currency_symbol, balance_sign)}",
    ]

    if report.is_empty:
        lines.append("Keine Einträge für diesen Zeitraum")

    return "\n".join(lines)
