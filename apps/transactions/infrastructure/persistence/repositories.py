"""
Repository pattern implementation.
Keeps transactions in process memory; nothing survives a restart.
"""

from dataclasses import replace
from typing import Dict, Optional

from apps.transactions.domain.interfaces import (
    BaseIdentifierGenerator,
    BaseTransactionRepository,
)
from apps.transactions.domain.models import Transaction
from apps.transactions.infrastructure.persistence.locks import ReadWriteLock


class InMemoryTransactionRepository(BaseTransactionRepository):
    """
    Repository for Transaction aggregate, backed by a dict.

    A new id is generated for each transaction as it is saved. Access to the
    dict is guarded by a reader/writer lock so that saves and lookups may run
    concurrently from different request threads.
    """

    def __init__(self, id_generator: BaseIdentifierGenerator):
        self.id_generator = id_generator
        self._data: Dict[str, Transaction] = {}
        self._lock = ReadWriteLock()

    def save(self, transaction: Transaction) -> Transaction:
        """Assign a fresh id and store the transaction. Returns the stored copy."""
        # a failing generator leaves the store untouched
        stored = replace(transaction, id=self.id_generator.new_id())

        with self._lock.write_locked():
            self._data[stored.id] = stored

        return stored

    def find_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by id, or None when it doesn't exist."""
        with self._lock.read_locked():
            return self._data.get(transaction_id)

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._data)
