"""Application services: transaction lookup and history (queries)."""

from __future__ import annotations

from hpos.application.dto import HistoryDTO, TransactionDTO
from hpos.domain.exceptions import EntityNotFoundError, ValidationError
from hpos.domain.model.transaction import TransactionStatus
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.transaction_repository import TransactionRepository

HISTORY_LIMIT = 50


class ShowTransactionHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self, transaction_id: str) -> TransactionDTO:
        transaction = self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise EntityNotFoundError(f"Transaction '{transaction_id}' not found")
        return TransactionDTO.from_transaction(transaction)


class ListTransactionsHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self, status: str | None = None, limit: int = HISTORY_LIMIT) -> HistoryDTO:
        """Recent transactions, newest first, with a summary of the listed ones."""
        status_filter = None
        if status is not None:
            try:
                status_filter = TransactionStatus(status.lower())
            except ValueError:
                raise ValidationError(f"Unknown status '{status}'", field="status")

        transactions = self._transaction_repo.list_recent(limit=limit, status=status_filter)

        revenue = Money.zero()
        for t in transactions:
            if t.status is TransactionStatus.COMPLETED:
                revenue = revenue + t.total

        return HistoryDTO(
            transactions=[TransactionDTO.from_transaction(t) for t in transactions],
            completed_revenue=str(revenue),
            pending_count=sum(1 for t in transactions if t.status is TransactionStatus.PENDING),
            voided_count=sum(1 for t in transactions if t.status is TransactionStatus.VOIDED),
        )
