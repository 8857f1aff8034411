"""
Slot encoding shared by the storage backends.

A slot holds the whole transaction list as one JSON array of records:
id, date, type, category, description, amount, month, year, isFixed.
"""

import json

import structlog
from pydantic import ValidationError

from finanztracker.models.transaction import Transaction
from finanztracker.services.storage.interface import CorruptDataError


logger = structlog.get_logger(__name__)


def encode_transactions(transactions: list[Transaction]) -> str:
    """Serialize the full list for a slot write."""
    return json.dumps(
        [transaction.to_storage_dict() for transaction in transactions],
        ensure_ascii=False,
    )


def decode_transactions(raw: str) -> list[Transaction]:
    """
    Parse slot contents.

    Records that fail model validation are skipped with a warning;
    the rest of the list is kept.

    Raises:
        CorruptDataError: If the contents are not a JSON array
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptDataError(f"Slot is not valid JSON: {e}")

    if not isinstance(data, list):
        raise CorruptDataError(
            f"Slot must hold a list of records, got {type(data).__name__}"
        )

    transactions = []
    for index, record in enumerate(data):
        try:
            transactions.append(Transaction.model_validate(record))
        except ValidationError as e:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(
                "skipping_invalid_record",
                index=index,
                record_id=record_id,
                error_count=e.error_count(),
            )

    return transactions
