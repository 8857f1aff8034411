"""
Main Orchestrator for FinanzTracker

This module ties together all the components and defines the
end-to-end flows for:
1. Booking (draft → validate → build record(s) → store → persist)
2. Deletion (id → store → persist)
3. Reporting (store contents → period report)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without passing validation
- A fixed entry always books exactly one next-month copy alongside it
- Every mutation is audited, including failed writes
"""

from datetime import date
from typing import Optional, Union
from uuid import UUID, uuid4

import structlog

from finanztracker.audit import AuditLogger, configure_logging, create_correlation_id
from finanztracker.config import Settings, get_settings
from finanztracker.models.report import PeriodReport
from finanztracker.models.transaction import (
    Period,
    Transaction,
    TransactionDraft,
    ValidationResult,
    one_month_later,
)
from finanztracker.queries import build_period_report, format_summary
from finanztracker.services.storage import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    LocalJsonTransactionStorage,
    PersistenceError,
    TransactionStorageInterface,
)
from finanztracker.store import TransactionStore
from finanztracker.validation import (
    TransactionValidationError,
    TransactionValidator,
    build_transaction,
)


logger = structlog.get_logger(__name__)


def next_month_copy(transaction: Transaction) -> Transaction:
    """
    Clone of a fixed entry dated one calendar month later.

    Month-end dates are clamped (31 Jan → 28/29 Feb).
    """
    return transaction.model_copy(update={
        "id": uuid4(),
        "transaction_date": one_month_later(transaction.transaction_date),
    })


class TransactionFlow:
    """
    Orchestrates booking and deleting transactions.

    Flow:
    1. Validate → Two-stage validation of the raw draft
    2. Build → One Transaction, plus its next-month copy if fixed
    3. Store → Insert at the front and persist the full list
    """

    def __init__(
        self,
        store: TransactionStore,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger

    def create_transaction(
        self,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
        today: Optional[date] = None,
    ) -> tuple[list[Transaction], ValidationResult]:
        """
        Validate a draft and book it.

        Returns:
            (created, validation_result) where created is in store order:
            the next-month copy first when the entry is fixed

        Raises:
            TransactionValidationError: If the draft fails validation
            PersistenceError: If the write fails; the records stay booked
                in memory
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(draft, today=today)
        if not result.is_valid:
            if self._audit_logger:
                issues = [
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                ]
                self._audit_logger.log_validation_failed(
                    draft_id=draft.draft_id,
                    issues=issues,
                    correlation_id=correlation_id,
                )
            raise TransactionValidationError(result)

        transaction = build_transaction(draft)
        created = [transaction]
        if transaction.is_fixed:
            created.append(next_month_copy(transaction))

        write_error = None
        try:
            self._store.add_all(created, correlation_id=correlation_id)
        except PersistenceError as e:
            write_error = e

        if self._audit_logger:
            self._audit_logger.log_transaction_created(
                transaction_id=transaction.id,
                transaction_type=transaction.transaction_type.value,
                category=transaction.category.value,
                amount=str(transaction.amount),
                correlation_id=correlation_id,
            )
            for copy in created[1:]:
                self._audit_logger.log_recurring_copy_created(
                    transaction_id=copy.id,
                    source_id=transaction.id,
                    booked_for=copy.transaction_date.isoformat(),
                    correlation_id=correlation_id,
                )

        if write_error is not None:
            raise write_error

        return list(reversed(created)), result

    def delete_transaction(
        self,
        transaction_id: Union[UUID, str],
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete a transaction by id.

        An unknown id is not an error: nothing changes and False is returned.

        Raises:
            PersistenceError: If the write fails; the deletion stands in memory
        """
        correlation_id = correlation_id or create_correlation_id()
        target = self._store.get(transaction_id)

        try:
            removed = self._store.remove(transaction_id, correlation_id=correlation_id)
        except PersistenceError:
            if self._audit_logger and target is not None:
                self._audit_logger.log_transaction_deleted(
                    transaction_id=target.id,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            if removed:
                self._audit_logger.log_transaction_deleted(
                    transaction_id=target.id,
                    correlation_id=correlation_id,
                )
            else:
                self._audit_logger.log_delete_missed(
                    transaction_id=str(transaction_id),
                    correlation_id=correlation_id,
                )

        return removed


class ReportFlow:
    """
    Builds period reports from the current store contents.

    Reports are recomputed from scratch on every call; nothing is cached.
    """

    def __init__(
        self,
        store: TransactionStore,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "€",
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._currency_symbol = currency_symbol

    def build_report(
        self,
        period: Optional[Period] = None,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> PeriodReport:
        """
        Report for the given period, or the current month if none is given.
        """
        correlation_id = correlation_id or create_correlation_id()
        period = period or Period.current(today)

        report = build_period_report(self._store.list(), period, today=today)

        if self._audit_logger:
            self._audit_logger.log_report_generated(
                period_label=period.label,
                transaction_count=len(report.transactions),
                correlation_id=correlation_id,
            )

        return report

    def summary(self, report: PeriodReport) -> str:
        """Plain-text header lines for a report."""
        return format_summary(report, self._currency_symbol)


def create_app_components(
    use_storage: bool = True,
    settings: Optional[Settings] = None,
) -> tuple[TransactionFlow, ReportFlow, TransactionStore]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to use the configured local JSON slot.
                    Set to False to keep everything in memory.
        settings: Settings to use instead of the cached global ones

    Returns:
        (transaction_flow, report_flow, store)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging(app_settings.log_level)

    audit_logger = AuditLogger(InMemoryAuditStorage())

    storage: TransactionStorageInterface
    if use_storage:
        slot_path = settings.storage.slot_path
        try:
            slot_path.parent.mkdir(parents=True, exist_ok=True)
            storage = LocalJsonTransactionStorage(slot_path)
        except OSError as e:
            # Data directory not usable - continue in memory
            logger.warning("storage_unavailable", path=str(slot_path), error=str(e))
            audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"path": str(slot_path), "fallback": "memory"},
            )
            storage = InMemoryTransactionStorage()
    else:
        storage = InMemoryTransactionStorage()

    store = TransactionStore(storage, audit_logger=audit_logger)
    store.load()

    transaction_flow = TransactionFlow(
        store=store,
        validator=TransactionValidator(app_settings),
        audit_logger=audit_logger,
    )

    report_flow = ReportFlow(
        store=store,
        audit_logger=audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )

    return transaction_flow, report_flow, store
