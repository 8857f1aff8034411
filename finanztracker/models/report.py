"""
Report Models for FinanzTracker

Everything the presentation layer needs for one period: totals,
per-category breakdowns and the chart series. These are computed values
only; nothing here is persisted.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, computed_field

from finanztracker.models.transaction import (
    Category,
    Period,
    Transaction,
    TransactionType,
)


EXPENSE_COLORS = (
    "#3b82f6", "#6366f1", "#8b5cf6", "#a855f7",
    "#d946ef", "#ec4899", "#f43f5e", "#f97316", "#eab308",
    "#06b6d4", "#64748b", "#94a3b8",
)

INCOME_COLORS = (
    "#059669", "#10b981", "#34d399", "#6ee7b7", "#a7f3d0",
)

PALETTES = {
    TransactionType.INCOME: INCOME_COLORS,
    TransactionType.EXPENSE: EXPENSE_COLORS,
}


class PeriodTotals(BaseModel):
    """
    Headline figures for a period.

    NOTE: balance is income - expenses, savings included in expenses.
    real_expenses is the spending figure with savings taken out.
    """

    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")
    real_expenses: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


class CategoryBreakdownItem(BaseModel):
    """One active category of a breakdown list."""

    category: Category
    amount: Decimal = Field(..., gt=0)
    percentage: float = Field(
        ...,
        ge=0.0,
        description="Share of the type's period total, 0-100"
    )


class ChartPoint(BaseModel):
    """One slice of the period chart."""

    category: Category
    transaction_type: TransactionType
    value: Decimal = Field(..., gt=0)
    color_index: int = Field(
        ...,
        ge=0,
        description="Index into the palette of the transaction type"
    )

    @computed_field
    @property
    def label(self) -> str:
        return f"{self.category.value} ({self.transaction_type.value})"

    @property
    def color(self) -> str:
        return PALETTES[self.transaction_type][self.color_index]


class PeriodReport(BaseModel):
    """All derived values for one (month, year) period."""

    period: Period
    generated_at: datetime = Field(
        default_factory=datetime.utcnow
    )

    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Period transactions, most recent date first"
    )
    totals: PeriodTotals = Field(default_factory=PeriodTotals)
    income_breakdown: list[CategoryBreakdownItem] = Field(default_factory=list)
    expense_breakdown: list[CategoryBreakdownItem] = Field(default_factory=list)
    chart_series: list[ChartPoint] = Field(default_factory=list)
    available_years: list[int] = Field(
        default_factory=list,
        description="Years selectable in the period filter, newest first"
    )

    @property
    def has_chart(self) -> bool:
        return len(self.chart_series) > 0

    @property
    def is_empty(self) -> bool:
        return len(self.transactions) == 0
