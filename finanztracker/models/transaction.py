"""
Core Data Models for FinanzTracker

These models define the schemas for all transaction data in the system.
They are designed to:
1. Enforce type safety at runtime
2. Tie every category to the transaction type it belongs to
3. Be serializable to the local storage slot format

DESIGN DECISION: month and year are derived from the transaction date on
read. They are still written out so existing storage slots keep their
shape, but stored values are never trusted when loading.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from dateutil.relativedelta import relativedelta
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Direction of money flow.

    Values match the labels written to existing storage slots.
    """
    INCOME = "Einnahme"
    EXPENSE = "Ausgabe"


class IncomeCategory(str, Enum):
    """Categories allowed for income transactions."""
    SALARY = "Gehalt"
    GIFTS = "Geschenke"


class ExpenseCategory(str, Enum):
    """
    Categories allowed for expense transactions.

    SAVINGS is special: it counts as an expense for the balance but is
    excluded from the "real" spending figure.
    """
    RENT = "Miete"
    ENERGY = "Strom / Gas"
    INTERNET_PHONE = "Internet - Handy"
    INSURANCE = "Versicherungen"
    MOBILITY = "Mobilität - Auto"
    GROCERIES = "Lebensmittel"
    DRUGSTORE = "Drogerie & Beauty"
    SHOPPING = "Shopping"
    LEISURE = "Freizeit"
    RESTAURANTS = "Gastronomie"
    OTHER = "Sonstiges"
    SAVINGS = "Sparen"


Category = Union[IncomeCategory, ExpenseCategory]

CATEGORIES_BY_TYPE: dict[TransactionType, type[Enum]] = {
    TransactionType.INCOME: IncomeCategory,
    TransactionType.EXPENSE: ExpenseCategory,
}

SAVINGS_CATEGORY = ExpenseCategory.SAVINGS

MIN_YEAR = 1000
MAX_YEAR = 9999

GERMAN_MONTH_NAMES = (
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
)


def categories_for(transaction_type: Union[TransactionType, str]) -> list[Category]:
    """Fixed category list for a transaction type, in display order."""
    return list(CATEGORIES_BY_TYPE[TransactionType(transaction_type)])


def category_for(
    transaction_type: Union[TransactionType, str],
    value: Union[Category, str],
) -> Category:
    """
    Resolve a category value within the set of the given type.

    Raises:
        ValueError: If the type is unknown or the category is not part of
            that type's set
    """
    category_enum = CATEGORIES_BY_TYPE[TransactionType(transaction_type)]
    try:
        return category_enum(value)
    except ValueError:
        raise ValueError(
            f"Category '{getattr(value, 'value', value)}' is not allowed for "
            f"{TransactionType(transaction_type).value} transactions"
        )


def one_month_later(day: date) -> date:
    """
    Same day one calendar month later, clamped to the month's last day
    (31 Jan -> 28/29 Feb).

    Raises:
        ValueError: If the result falls outside the four-digit year range
    """
    try:
        return day + relativedelta(months=1)
    except ValueError:
        raise ValueError(f"{day.isoformat()} has no following month")


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single recorded income or expense.

    Transactions are immutable once created; the only lifecycle change
    is deletion from the store.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    transaction_date: date = Field(
        ...,
        alias="date",
        description="Calendar date of the transaction"
    )
    transaction_type: TransactionType = Field(
        ...,
        alias="type",
        description="Income or expense"
    )
    category: Category = Field(
        ...,
        description="Category from the set belonging to the transaction type"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Optional free text label"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount, currency-agnostic"
    )
    is_fixed: bool = Field(
        default=False,
        alias="isFixed",
        description="Recurring entry; creation also books next month's copy"
    )

    @model_validator(mode='after')
    def validate_category_matches_type(self) -> 'Transaction':
        """Category must belong to the set of its transaction type."""
        if not isinstance(self.category, CATEGORIES_BY_TYPE[self.transaction_type]):
            raise ValueError(
                f"Category '{self.category.value}' is not allowed for "
                f"{self.transaction_type.value} transactions"
            )
        return self

    @computed_field
    @property
    def month(self) -> int:
        return self.transaction_date.month

    @computed_field
    @property
    def year(self) -> int:
        return self.transaction_date.year

    @property
    def is_savings(self) -> bool:
        return self.category == SAVINGS_CATEGORY

    @property
    def display_label(self) -> str:
        """Description if given, otherwise the category name."""
        return self.description or self.category.value

    @property
    def signed_amount(self) -> Decimal:
        if self.transaction_type == TransactionType.INCOME:
            return self.amount
        return -self.amount

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, amount: Decimal) -> float:
        # Storage slots hold plain JSON numbers
        return float(amount)

    def to_storage_dict(self) -> dict:
        """Convert to the record shape written to the storage slot."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# PERIOD
# =============================================================================

class Period(BaseModel):
    """A (month, year) pair used to select transactions for display."""
    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)

    @classmethod
    def of(cls, day: date) -> 'Period':
        return cls(month=day.month, year=day.year)

    @classmethod
    def current(cls, today: Optional[date] = None) -> 'Period':
        return cls.of(today or date.today())

    def contains(self, day: date) -> bool:
        return day.month == self.month and day.year == self.year

    @property
    def label(self) -> str:
        """German long month name and year, e.g. 'März 2024'."""
        return f"{GERMAN_MONTH_NAMES[self.month - 1]} {self.year}"


# =============================================================================
# INPUT MODEL
# =============================================================================

class TransactionDraft(BaseModel):
    """
    Raw transaction input as submitted by the user.

    CRITICAL: This is UNTRUSTED data. Every field is optional and loosely
    typed; the validator decides whether a Transaction can be built from it.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    draft_id: UUID = Field(
        default_factory=uuid4,
        description="Identifier for tracing this submission"
    )
    transaction_date: Optional[Union[date, str]] = Field(
        default=None,
        alias="date",
    )
    transaction_type: Optional[str] = Field(
        default=None,
        alias="type",
    )
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Union[Decimal, str]] = None
    is_fixed: bool = Field(
        default=False,
        alias="isFixed",
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Schema validation (types, required fields, category sets)
    Stage 2: Semantic validation (plausibility checks, warnings only)
    """

    draft_id: UUID = Field(
        ...,
        description="ID of the draft being validated"
    )
    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )

    schema_valid: bool = Field(
        ...,
        description="Did schema validation pass?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Did semantic validation pass?"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
