"""
Transaction Store

The single owner of all transaction records. Holds the list in memory,
most recently added first, and writes the full list through the injected
storage port after every mutation.

IMPORTANT: If a write fails the in-memory list is NOT rolled back.
It stays authoritative for the session and the PersistenceError is
raised so the caller can tell the user.
"""

from typing import Iterable, Iterator, Optional, Union
from uuid import UUID

import structlog

from finanztracker.audit import AuditLogger
from finanztracker.models.transaction import Transaction
from finanztracker.services.storage import (
    PersistenceError,
    StorageError,
    TransactionStorageInterface,
)


logger = structlog.get_logger(__name__)

TransactionId = Union[UUID, str]


def _normalize_id(transaction_id: TransactionId) -> Optional[UUID]:
    if isinstance(transaction_id, UUID):
        return transaction_id
    try:
        return UUID(str(transaction_id))
    except ValueError:
        return None


class TransactionStore:
    """
    Ordered, persisted collection of transactions.

    Usage:
        store = TransactionStore(LocalJsonTransactionStorage(path))
        store.load()
        store.add(transaction)
        store.remove(transaction.id)
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._transactions: list[Transaction] = []

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    def load(self) -> int:
        """
        Read the persisted list, replacing what is in memory.

        Falls back to an empty store if the slot cannot be read or parsed.

        Returns:
            Number of transactions loaded
        """
        try:
            self._transactions = self._storage.load_transactions()
        except StorageError as e:
            logger.warning("store_load_failed", source=self._storage.source, error=str(e))
            if self._audit_logger:
                self._audit_logger.log_store_load_failed(
                    error_message=str(e),
                    source=self._storage.source,
                )
            self._transactions = []
            return 0

        if self._audit_logger:
            self._audit_logger.log_store_loaded(
                transaction_count=len(self._transactions),
                source=self._storage.source,
            )
        return len(self._transactions)

    def add(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Insert at the front and persist."""
        self.add_all([transaction], correlation_id=correlation_id)

    def add_all(
        self,
        transactions: Iterable[Transaction],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """
        Insert several transactions, each at the front, with one write.

        The last one given ends up first.
        """
        for transaction in transactions:
            self._transactions.insert(0, transaction)
        self._persist(correlation_id)

    def remove(
        self,
        transaction_id: TransactionId,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete the first transaction with the given id.

        Returns:
            True if a transaction was removed, False if none matched
            (nothing is written in that case)
        """
        wanted = _normalize_id(transaction_id)
        if wanted is None:
            return False

        for index, transaction in enumerate(self._transactions):
            if transaction.id == wanted:
                del self._transactions[index]
                self._persist(correlation_id)
                return True
        return False

    def get(self, transaction_id: TransactionId) -> Optional[Transaction]:
        wanted = _normalize_id(transaction_id)
        for transaction in self._transactions:
            if transaction.id == wanted:
                return transaction
        return None

    def _persist(self, correlation_id: Optional[UUID]) -> None:
        try:
            self._storage.save_transactions(list(self._transactions))
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(str(e)) from e

        if self._audit_logger:
            self._audit_logger.log_store_saved(
                transaction_count=len(self._transactions),
                correlation_id=correlation_id,
            )

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

    def list(self) -> list[Transaction]:
        """Full sequence in insertion order (a copy)."""
        return list(self._transactions)
