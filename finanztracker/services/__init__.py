"""Services package."""

from finanztracker.services.storage import (
    AuditStorageInterface,
    CorruptDataError,
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    LocalJsonTransactionStorage,
    PersistenceError,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    "AuditStorageInterface",
    "CorruptDataError",
    "InMemoryAuditStorage",
    "InMemoryTransactionStorage",
    "LocalJsonTransactionStorage",
    "PersistenceError",
    "StorageError",
    "TransactionStorageInterface",
]
