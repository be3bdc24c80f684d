"""Abstract repository for the Transaction aggregate.

``add`` writes a transaction together with its items as one unit: readers
never see a transaction without its items.  Implementations raise
``PersistenceError`` when the store fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hpos.domain.model.transaction import Transaction, TransactionStatus


class TransactionRepository(ABC):

    @abstractmethod
    def add(self, transaction: Transaction) -> None:
        """Persist a new transaction and its items; assigns ``transaction.id``."""

    @abstractmethod
    def get_by_id(self, transaction_id: str) -> Transaction | None:
        """Return a transaction by its ID, or None if not found."""

    @abstractmethod
    def list_by_guest(self, guest_id: str) -> list[Transaction]:
        """Return every transaction charged to *guest_id*, newest first."""

    @abstractmethod
    def list_recent(
        self,
        limit: int = 50,
        status: TransactionStatus | None = None,
    ) -> list[Transaction]:
        """Return up to *limit* transactions, newest first."""

    @abstractmethod
    def save(self, transaction: Transaction) -> None:
        """Persist a status change on an existing transaction."""
