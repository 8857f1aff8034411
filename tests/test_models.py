"""
Tests for FinanzTracker models

Test strategy:
1. Unit tests for models (transactions, periods, drafts, audit events)
2. Flow tests run against in-memory storage
3. File storage tests use pytest's tmp_path
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import ValidationError

from finanztracker.models.transaction import (
    CATEGORIES_BY_TYPE,
    SAVINGS_CATEGORY,
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
)
from finanztracker.models.report import ChartPoint, EXPENSE_COLORS, INCOME_COLORS
from finanztracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        transaction = Transaction(
            transaction_date=date(2024, 3, 15),
            transaction_type=TransactionType.EXPENSE,
            category=ExpenseCategory.GROCERIES,
            description="Wocheneinkauf",
            amount=Decimal("54.20"),
        )
        assert isinstance(transaction.id, UUID)
        assert transaction.category == ExpenseCategory.GROCERIES
        assert transaction.amount == Decimal("54.20")
        assert transaction.is_fixed is False

    def test_month_and_year_follow_date(self):
        transaction = Transaction(
            transaction_date=date(2023, 12, 31),
            transaction_type=TransactionType.INCOME,
            category=IncomeCategory.GIFTS,
            amount=Decimal("50"),
        )
        assert transaction.month == 12
        assert transaction.year == 2023

    def test_parses_storage_aliases(self):
        """Records from the storage slot use date/type/isFixed keys."""
        transaction = Transaction.model_validate({
            "id": "0b0f7b7e-6a55-4a4e-9a7e-1c2d3e4f5a6b",
            "date": "2024-03-01",
            "type": "Ausgabe",
            "category": "Miete",
            "description": "",
            "amount": 800,
            "month": 3,
            "year": 2024,
            "isFixed": True,
        })
        assert transaction.transaction_type == TransactionType.EXPENSE
        assert transaction.category == ExpenseCategory.RENT
        assert transaction.is_fixed is True

    def test_stored_month_is_ignored(self):
        """A stale month field does not override the date."""
        transaction = Transaction.model_validate({
            "date": "2024-03-01",
            "type": "Ausgabe",
            "category": "Miete",
            "amount": 800,
            "month": 7,
            "year": 1999,
        })
        assert transaction.month == 3
        assert transaction.year == 2024

    def test_rejects_category_of_other_type(self):
        """Income cannot use an expense category."""
        with pytest.raises(ValueError, match="not allowed"):
            Transaction(
                transaction_date=date(2024, 3, 1),
                transaction_type=TransactionType.INCOME,
                category=ExpenseCategory.RENT,
                amount=Decimal("10"),
            )

    def test_rejects_unknown_category(self):
        with pytest.raises(ValidationError):
            Transaction.model_validate({
                "date": "2024-03-01",
                "type": "Ausgabe",
                "category": "Urlaub",
                "amount": 10,
            })

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Transaction(
                transaction_date=date(2024, 3, 1),
                transaction_type=TransactionType.EXPENSE,
                category=ExpenseCategory.RENT,
                amount=Decimal("-1"),
            )

    def test_transaction_is_immutable(self, make_transaction):
        transaction = make_transaction()
        with pytest.raises(ValidationError):
            transaction.amount = Decimal("1")

    def test_storage_dict_shape(self, make_transaction):
        """Storage records keep the original key names."""
        transaction = make_transaction("12.5", ExpenseCategory.SHOPPING, is_fixed=True)
        record = transaction.to_storage_dict()

        assert set(record) == {
            "id", "date", "type", "category", "description",
            "amount", "month", "year", "isFixed",
        }
        assert record["date"] == "2024-03-15"
        assert record["type"] == "Ausgabe"
        assert record["category"] == "Shopping"
        assert record["amount"] == 12.5
        assert record["month"] == 3
        assert record["isFixed"] is True

    def test_display_helpers(self, make_transaction):
        savings = make_transaction("200", ExpenseCategory.SAVINGS)
        salary = make_transaction("2000", IncomeCategory.SALARY, description="März")

        assert savings.is_savings is True
        assert savings.display_label == "Sparen"
        assert savings.signed_amount == Decimal("-200")
        assert salary.is_savings is False
        assert salary.display_label == "März"
        assert salary.signed_amount == Decimal("2000")


class TestCategories:
    """Tests for the category sets."""

    def test_sets_are_disjoint(self):
        income = {c.value for c in IncomeCategory}
        expense = {c.value for c in ExpenseCategory}
        assert income.isdisjoint(expense)

    def test_categories_for_type(self):
        assert categories_for(TransactionType.INCOME) == [
            IncomeCategory.SALARY, IncomeCategory.GIFTS,
        ]
        assert len(categories_for("Ausgabe")) == 12
        assert categories_for("Ausgabe")[-1] == SAVINGS_CATEGORY

    def test_category_for_resolves_within_type(self):
        assert category_for("Ausgabe", "Sparen") == ExpenseCategory.SAVINGS
        assert CATEGORIES_BY_TYPE[TransactionType.INCOME] is IncomeCategory

    def test_category_for_rejects_other_type(self):
        with pytest.raises(ValueError, match="not allowed for Einnahme"):
            category_for(TransactionType.INCOME, "Sparen")

    def test_category_values(self):
        """Test category string values."""
        assert ExpenseCategory.ENERGY.value == "Strom / Gas"
        assert ExpenseCategory.MOBILITY.value == "Mobilität - Auto"
        assert IncomeCategory.SALARY.value == "Gehalt"


class TestPeriod:
    """Tests for the Period model."""

    def test_contains(self):
        period = Period(month=3, year=2024)
        assert period.contains(date(2024, 3, 31))
        assert not period.contains(date(2024, 4, 1))
        assert not period.contains(date(2023, 3, 15))

    def test_current(self):
        assert Period.current(date(2026, 10, 19)) == Period(month=10, year=2026)

    def test_label_uses_german_month_names(self):
        assert Period(month=3, year=2024).label == "März 2024"
        assert Period(month=12, year=2025).label == "Dezember 2025"

    def test_rejects_invalid_month(self):
        with pytest.raises(ValidationError):
            Period(month=13, year=2024)

    def test_rejects_short_year(self):
        with pytest.raises(ValidationError):
            Period(month=1, year=24)


class TestTransactionDraft:
    """Tests for raw transaction input."""

    def test_accepts_aliases(self):
        draft = TransactionDraft(
            date="2024-03-15",
            type="Ausgabe",
            category="Miete",
            amount="800",
            isFixed=True,
        )
        assert draft.transaction_date == "2024-03-15"
        assert draft.transaction_type == "Ausgabe"
        assert draft.is_fixed is True

    def test_all_fields_optional(self):
        draft = TransactionDraft()
        assert draft.amount is None
        assert draft.category is None
        assert isinstance(draft.draft_id, UUID)

    def test_strips_whitespace(self):
        draft = TransactionDraft(category="  Miete  ", amount=" 12,50 ")
        assert draft.category == "Miete"
        assert draft.amount == "12,50"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            draft_id=uuid4(),
            schema_valid=False,
            semantic_valid=False,
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            draft_id=uuid4(),
            schema_valid=True,
            semantic_valid=True,
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message="Date in future",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_issue_severity_is_restricted(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestChartPoint:
    """Tests for chart point labels and colours."""

    def test_label_and_color(self):
        point = ChartPoint(
            category=ExpenseCategory.SAVINGS,
            transaction_type=TransactionType.EXPENSE,
            value=Decimal("200"),
            color_index=11,
        )
        assert point.label == "Sparen (Ausgabe)"
        assert point.color == EXPENSE_COLORS[11]

    def test_income_palette(self):
        point = ChartPoint(
            category=IncomeCategory.GIFTS,
            transaction_type=TransactionType.INCOME,
            value=Decimal("50"),
            color_index=1,
        )
        assert point.color == INCOME_COLORS[1]
        assert point.model_dump()["label"] == "Geschenke (Einnahme)"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            description="Loaded 3 transactions",
        )
        assert event.event_type == AuditEventType.STORE_LOADED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATED,
            description="Ausgabe booked",
            details={"category": "Miete", "amount": "800"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_created"
        assert log_dict["details"]["category"] == "Miete"

    def test_audit_event_builder_transaction_created(self):
        transaction_id = uuid4()
        correlation_id = uuid4()

        event = AuditEventBuilder.transaction_created(
            transaction_id=transaction_id,
            transaction_type="Ausgabe",
            category="Miete",
            amount="800",
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.TRANSACTION_CREATED
        assert event.entity_id == transaction_id
        assert event.correlation_id == correlation_id
        assert event.is_user_action is True

    def test_audit_event_builder_delete_missed(self):
        event = AuditEventBuilder.delete_missed(
            transaction_id="missing",
            correlation_id=uuid4(),
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.details["transaction_id"] == "missing"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
