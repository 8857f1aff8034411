"""Input validation package."""

from finanztracker.validation.validator import (
    TransactionValidationError,
    TransactionValidator,
    build_transaction,
    parse_amount,
    parse_date,
)

__all__ = [
    "TransactionValidationError",
    "TransactionValidator",
    "build_transaction",
    "parse_amount",
    "parse_date",
]
