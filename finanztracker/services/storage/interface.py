"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the local JSON slot for another backend later
2. Use in-memory storage for testing
3. Keep the transaction store decoupled from where data lives

The transaction port is deliberately tiny: the whole list is read once
and written back wholesale after every mutation.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from finanztracker.models.audit import AuditEvent
from finanztracker.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for the transaction slot.

    Any storage implementation must implement these methods.
    """

    #: Human-readable location, used in logs and audit events
    source: str = "unknown"

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """
        Read the full transaction list.

        Returns:
            Stored transactions in insertion order, empty if nothing is stored

        Raises:
            CorruptDataError: If the stored contents cannot be parsed
            PersistenceError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save_transactions(self, transactions: list[Transaction]) -> bool:
        """
        Overwrite the slot with the full transaction list.

        Args:
            transactions: Complete list in insertion order

        Returns:
            True if saved successfully

        Raises:
            PersistenceError: If the write fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: Optional[UUID] = None,
    ) -> list[AuditEvent]:
        """
        Get all events for an entity type, optionally one entity.

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceError(StorageError):
    """Storage backend could not be read or written."""
    pass


class CorruptDataError(StorageError):
    """Stored contents could not be parsed."""
    pass
