"""Shared fixtures for FinanzTracker tests."""

from datetime import date
from decimal import Decimal

import pytest

from finanztracker.config import AppSettings
from finanztracker.models.transaction import (
    ExpenseCategory,
    IncomeCategory,
    Transaction,
    TransactionType,
)


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""
    def _make(
        amount="100",
        category=ExpenseCategory.RENT,
        day=date(2024, 3, 15),
        description="",
        is_fixed=False,
    ) -> Transaction:
        transaction_type = (
            TransactionType.INCOME
            if isinstance(category, IncomeCategory)
            else TransactionType.EXPENSE
        )
        return Transaction(
            transaction_date=day,
            transaction_type=transaction_type,
            category=category,
            description=description,
            amount=Decimal(amount),
            is_fixed=is_fixed,
        )
    return _make


@pytest.fixture
def march_2024(make_transaction):
    """Salary, rent and savings booked in March 2024."""
    return [
        make_transaction("2000", IncomeCategory.SALARY, date(2024, 3, 1)),
        make_transaction("800", ExpenseCategory.RENT, date(2024, 3, 3)),
        make_transaction("200", ExpenseCategory.SAVINGS, date(2024, 3, 5)),
    ]


@pytest.fixture
def app_settings():
    return AppSettings(
        future_date_tolerance_days=30,
        max_transaction_amount=10000.0,
        currency_symbol="€",
    )
