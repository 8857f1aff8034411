"""
Two-Stage Validation Pipeline

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Required field presence
- Type coercion (amount to Decimal, date from ISO text)
- Transaction type and category membership
- Non-negative, finite amounts
- Any issue here blocks the booking

STAGE 2 - SEMANTIC VALIDATION:
- Dates far in the future
- Absurdly large amounts
- Zero amounts
- These only produce warnings

IMPORTANT: Validation NEVER silently fixes issues beyond type coercion.
It reports them so the caller can show them to the user.
"""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from finanztracker.config import AppSettings, get_settings
from finanztracker.models.transaction import (
    MAX_YEAR,
    MIN_YEAR,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    category_for,
    one_month_later,
)


class TransactionValidationError(Exception):
    """Raised when a draft cannot be turned into a transaction."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = [issue.message for issue in result.issues if issue.severity == "error"]
        super().__init__("; ".join(messages) or "Transaction input is invalid")


def parse_amount(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """
    Coerce user input to a Decimal amount.

    Accepts a decimal comma ("12,50") as entered in German locales.

    Raises:
        ValueError: If the value is missing, not numeric, or cannot be
            stored as a JSON number without loss
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Amount is required")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip().replace(" ", "")
        if not text:
            raise ValueError("Amount is required")
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Amount '{value}' is not a number")

    if not amount.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number")

    # Slots store amounts as JSON numbers
    stored = float(amount)
    if not math.isfinite(stored):
        raise ValueError(f"Amount '{value}' is too large to be stored")
    if Decimal(repr(stored)) != amount:
        raise ValueError(f"Amount '{value}' has more precision than can be stored")
    return amount


def parse_date(value: Union[date, str, None]) -> date:
    """
    Coerce user input to a calendar date.

    Raises:
        ValueError: If the value is missing, not an ISO date, or its year
            does not have four digits
    """
    if value is None:
        raise ValueError("Date is required")
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("Date is required")
        try:
            day = date.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Date '{value}' is not in YYYY-MM-DD format")

    if not MIN_YEAR <= day.year <= MAX_YEAR:
        raise ValueError(f"Date '{value}' must have a four-digit year")
    return day


def build_transaction(draft: TransactionDraft) -> Transaction:
    """
    Build a Transaction from a draft that passed schema validation.

    Raises:
        ValueError: If the draft is invalid (pydantic's ValidationError
            is a ValueError)
    """
    transaction_type = TransactionType(draft.transaction_type)
    return Transaction(
        transaction_date=parse_date(draft.transaction_date),
        transaction_type=transaction_type,
        category=category_for(transaction_type, draft.category),
        description=draft.description or "",
        amount=parse_amount(draft.amount),
        is_fixed=draft.is_fixed,
    )


class TransactionValidator:
    """
    Validates transaction drafts through a two-stage pipeline.

    Stage 1: Schema validation (blocking)
    Stage 2: Semantic validation (warnings)
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            settings: Thresholds to use. Defaults to the configured app settings.
        """
        self._settings = settings or get_settings().app

    def _validate_schema(
        self,
        draft: TransactionDraft,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        # Date
        try:
            booked_on = parse_date(draft.transaction_date)
        except ValueError as e:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing" if draft.transaction_date in (None, "") else "invalid_format",
                message=str(e),
                severity="error",
                suggested_fix="Enter the date as YYYY-MM-DD",
            ))
        else:
            if draft.is_fixed:
                try:
                    one_month_later(booked_on)
                except ValueError as e:
                    issues.append(ValidationIssue(
                        field="date",
                        issue_type="invalid_value",
                        message=f"Fixed entry cannot be repeated: {e}",
                        severity="error",
                        suggested_fix="Book this entry without marking it as fixed",
                    ))

        # Amount
        try:
            amount = parse_amount(draft.amount)
        except ValueError as e:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if draft.amount in (None, "") else "invalid_format",
                message=str(e),
                severity="error",
                suggested_fix="Enter a number such as 12.50",
            ))
        else:
            if amount < 0:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount cannot be negative",
                    severity="error",
                    suggested_fix="Choose Ausgabe as type instead of entering a negative amount",
                ))

        # Type and category
        transaction_type = None
        try:
            transaction_type = TransactionType(draft.transaction_type)
        except ValueError:
            allowed = ", ".join(t.value for t in TransactionType)
            issues.append(ValidationIssue(
                field="type",
                issue_type="missing" if not draft.transaction_type else "invalid_value",
                message=f"Transaction type must be one of: {allowed}",
                severity="error",
            ))

        if not draft.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                severity="error",
            ))
        elif transaction_type is not None:
            try:
                category_for(transaction_type, draft.category)
            except ValueError as e:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="invalid_value",
                    message=str(e),
                    severity="error",
                    suggested_fix="Pick a category from the list for this type",
                ))

        if draft.description and len(draft.description) > 500:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message="Description cannot exceed 500 characters",
                severity="error",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def _validate_semantic(
        self,
        draft: TransactionDraft,
        today: Optional[date] = None,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Only runs on drafts that passed stage 1, so parsing is safe here.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        today = today or date.today()
        booked_on = parse_date(draft.transaction_date)
        amount = parse_amount(draft.amount)

        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if booked_on > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({booked_on}) is far in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        max_amount = Decimal(str(self._settings.max_transaction_amount))
        if amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        if amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero",
                severity="warning",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(
        self,
        draft: TransactionDraft,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            draft: The raw input to validate
            today: Reference date for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(draft)
        all_issues.extend(schema_issues)

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(draft, today)
            all_issues.extend(semantic_issues)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        return ValidationResult(
            draft_id=draft.draft_id,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )
