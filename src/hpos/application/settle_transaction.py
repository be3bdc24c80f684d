"""Application service: Settle a pending transaction (PENDING -> COMPLETED)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from hpos.application.dto import TransactionDTO
from hpos.domain.exceptions import EntityNotFoundError, PersistenceError
from hpos.domain.model.transaction import PaymentMethod, utcnow
from hpos.domain.repository.transaction_repository import TransactionRepository

logger = logging.getLogger("hpos.transactions")


class SettleTransactionHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._clock = clock

    def handle(self, transaction_id: str, payment_method: str) -> TransactionDTO:
        method = PaymentMethod.parse(payment_method)

        transaction = self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise EntityNotFoundError(f"Transaction '{transaction_id}' not found")

        transaction.settle(method, self._clock())
        try:
            self._transaction_repo.save(transaction)
        except PersistenceError as exc:
            logger.error("Failed to settle %s: %s", transaction.transaction_number, exc)
            raise PersistenceError("Failed to process payment. Please try again.") from exc

        logger.info(
            "Settled %s for %s via %s",
            transaction.transaction_number,
            transaction.total,
            method.value,
        )
        return TransactionDTO.from_transaction(transaction)
