"""
Aggregation and Filter Engine

Pure functions over a list of transactions. Nothing here touches storage
and nothing here raises on well-formed input: empty periods give zero
totals and empty lists, and a zero total gives zero percentages.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finanztracker.models.report import (
    PALETTES,
    CategoryBreakdownItem,
    ChartPoint,
    PeriodTotals,
)
from finanztracker.models.transaction import (
    SAVINGS_CATEGORY,
    Category,
    Period,
    Transaction,
    TransactionType,
    categories_for,
)


ZERO = Decimal("0")


def filter_by_period(
    transactions: Iterable[Transaction],
    period: Period,
) -> list[Transaction]:
    """Transactions whose date falls in the period, order preserved."""
    return [t for t in transactions if period.contains(t.transaction_date)]


def sort_for_display(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Most recent date first; equal dates keep their original order."""
    return sorted(transactions, key=lambda t: t.transaction_date, reverse=True)


def sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), ZERO)


def total_for_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    return sum_amounts(t for t in transactions if t.transaction_type == transaction_type)


def total_for_category(
    transactions: Iterable[Transaction],
    category: Category,
) -> Decimal:
    return sum_amounts(t for t in transactions if t.category == category)


def compute_totals(transactions: Iterable[Transaction]) -> PeriodTotals:
    """
    Headline figures for an already filtered list.

    Savings are counted by category regardless of type. They are part of
    expenses, so they lower the balance, but are left out of real_expenses.
    """
    transactions = list(transactions)
    income = total_for_type(transactions, TransactionType.INCOME)
    expenses = total_for_type(transactions, TransactionType.EXPENSE)
    savings = total_for_category(transactions, SAVINGS_CATEGORY)

    return PeriodTotals(
        income=income,
        expenses=expenses,
        savings=savings,
        real_expenses=expenses - savings,
        balance=income - expenses,
    )


def percentage_of(amount: Decimal, total: Decimal) -> float:
    if total <= 0:
        return 0.0
    return float(amount / total * 100)


def category_totals(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[tuple[int, Category, Decimal]]:
    """
    (position, category, total) for every category of the type's set
    whose total is strictly positive, in set order.
    """
    transactions = list(transactions)
    totals = []
    for position, category in enumerate(categories_for(transaction_type)):
        amount = total_for_category(transactions, category)
        if amount > 0:
            totals.append((position, category, amount))
    return totals


def category_breakdown(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
    total: Optional[Decimal] = None,
) -> list[CategoryBreakdownItem]:
    """
    Active categories of one type with their share of the period total.

    Args:
        transactions: Already filtered period transactions
        transaction_type: Which category set to report
        total: Period total the percentages refer to; defaults to the
            type's total over the given transactions
    """
    transactions = list(transactions)
    if total is None:
        total = total_for_type(transactions, transaction_type)

    return [
        CategoryBreakdownItem(
            category=category,
            amount=amount,
            percentage=percentage_of(amount, total),
        )
        for _, category, amount in category_totals(transactions, transaction_type)
    ]


def chart_series(transactions: Iterable[Transaction]) -> list[ChartPoint]:
    """
    One point per active category, income categories first.

    color_index is the category's position in its own set, wrapped to the
    palette of its type.
    """
    transactions = list(transactions)
    series = []
    for transaction_type in (TransactionType.INCOME, TransactionType.EXPENSE):
        palette = PALETTES[transaction_type]
        for position, category, amount in category_totals(transactions, transaction_type):
            series.append(ChartPoint(
                category=category,
                transaction_type=transaction_type,
                value=amount,
                color_index=position % len(palette),
            ))
    return series


def available_years(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[int]:
    """The current year plus every year with data, newest first."""
    today = today or date.today()
    years = {today.year}
    years.update(t.year for t in transactions)
    return sorted(years, reverse=True)
