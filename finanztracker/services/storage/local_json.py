"""
Local JSON Slot Storage

DESIGN DECISION: Transactions live in one JSON file per slot, the local
equivalent of a browser storage key. Writes go to a temp file that is
swapped in with os.replace, so a crash mid-write never leaves half a list.

TRADEOFFS:
- Every mutation rewrites the whole file (fine for personal use)
- No protection against two processes writing the same slot
"""

import os
import tempfile
from pathlib import Path
from typing import Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finanztracker.models.transaction import Transaction
from finanztracker.services.storage.interface import (
    CorruptDataError,
    PersistenceError,
    TransactionStorageInterface,
)
from finanztracker.services.storage.slot import (
    decode_transactions,
    encode_transactions,
)


logger = structlog.get_logger(__name__)


class LocalJsonTransactionStorage(TransactionStorageInterface):
    """
    Transaction slot backed by a JSON file on local disk.

    A missing file is an empty slot.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self.source = str(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def load_transactions(self) -> list[Transaction]:
        """Read and parse the slot file."""
        if not self._path.exists():
            logger.info("slot_missing", path=self.source)
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"Slot {self.source} is not UTF-8 text: {e}")
        except OSError as e:
            raise PersistenceError(f"Failed to read {self.source}: {e}")

        if not raw.strip():
            return []

        transactions = decode_transactions(raw)
        logger.info("slot_loaded", path=self.source, count=len(transactions))
        return transactions

    def save_transactions(self, transactions: list[Transaction]) -> bool:
        """Overwrite the slot file with the full list."""
        payload = encode_transactions(transactions)
        try:
            self._write_slot(payload)
        except OSError as e:
            logger.error("slot_write_failed", path=self.source, error=str(e))
            raise PersistenceError(f"Failed to write {self.source}: {e}")

        logger.debug("slot_saved", path=self.source, count=len(transactions))
        return True

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_slot(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
