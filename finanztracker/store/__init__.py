"""Transaction store package."""

from finanztracker.store.transactions import TransactionStore

__all__ = ["TransactionStore"]
