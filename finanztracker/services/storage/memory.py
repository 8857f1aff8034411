"""
In-Memory Storage

Process-local backends for tests and for running without a writable
data directory. The transaction slot still goes through the JSON
encoding so it behaves like the file backend.
"""

from typing import Optional
from uuid import UUID

from finanztracker.models.audit import AuditEvent
from finanztracker.models.transaction import Transaction
from finanztracker.services.storage.interface import (
    AuditStorageInterface,
    TransactionStorageInterface,
)
from finanztracker.services.storage.slot import (
    decode_transactions,
    encode_transactions,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Transaction slot held as a JSON string in memory."""

    source = "memory"

    def __init__(self, raw: Optional[str] = None):
        self.raw = raw
        self.save_count = 0

    def load_transactions(self) -> list[Transaction]:
        if not self.raw:
            return []
        return decode_transactions(self.raw)

    def save_transactions(self, transactions: list[Transaction]) -> bool:
        self.raw = encode_transactions(transactions)
        self.save_count += 1
        return True


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit list kept for the lifetime of the process."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: Optional[UUID] = None,
    ) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type
            and (entity_id is None or event.entity_id == entity_id)
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
