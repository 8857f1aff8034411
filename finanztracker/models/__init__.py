"""
Data Models Package

This package contains all Pydantic models used in FinanzTracker.
All data flowing through the system must conform to these schemas.
"""

from finanztracker.models.transaction import (
    CATEGORIES_BY_TYPE,
    MAX_YEAR,
    MIN_YEAR,
    SAVINGS_CATEGORY,
    Category,
    ExpenseCategory,
    IncomeCategory,
    Period,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    categories_for,
    category_for,
    one_month_later,
)
from finanztracker.models.report import (
    EXPENSE_COLORS,
    INCOME_COLORS,
    CategoryBreakdownItem,
    ChartPoint,
    PeriodReport,
    PeriodTotals,
)
from finanztracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "CATEGORIES_BY_TYPE",
    "MAX_YEAR",
    "MIN_YEAR",
    "SAVINGS_CATEGORY",
    "Category",
    "ExpenseCategory",
    "IncomeCategory",
    "Period",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    "categories_for",
    "category_for",
    "one_month_later",
    # Report models
    "EXPENSE_COLORS",
    "INCOME_COLORS",
    "CategoryBreakdownItem",
    "ChartPoint",
    "PeriodReport",
    "PeriodTotals",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
