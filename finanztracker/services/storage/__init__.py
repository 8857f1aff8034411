"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
The transaction slot is a local JSON file by default; in-memory backends
are available for tests.
"""

from finanztracker.services.storage.interface import (
    AuditStorageInterface,
    CorruptDataError,
    PersistenceError,
    StorageError,
    TransactionStorageInterface,
)
from finanztracker.services.storage.local_json import LocalJsonTransactionStorage
from finanztracker.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
)
from finanztracker.services.storage.slot import (
    decode_transactions,
    encode_transactions,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "TransactionStorageInterface",
    # Exceptions
    "CorruptDataError",
    "PersistenceError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryTransactionStorage",
    "LocalJsonTransactionStorage",
    # Slot encoding
    "decode_transactions",
    "encode_transactions",
]
