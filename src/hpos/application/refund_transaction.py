"""Application service: Refund a completed transaction.

Card and cash capture are simulated, so a refund only records the new
status and the reason; no money is returned through a payment processor.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from hpos.application.dto import TransactionDTO
from hpos.domain.exceptions import EntityNotFoundError, PersistenceError
from hpos.domain.model.transaction import utcnow
from hpos.domain.model.validation import validate_refund_amount, validate_refund_reason
from hpos.domain.repository.transaction_repository import TransactionRepository

logger = logging.getLogger("hpos.transactions")


class RefundTransactionHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._clock = clock

    def handle(self, transaction_id: str, reason: str) -> TransactionDTO:
        validate_refund_reason(reason).raise_for_failure()

        transaction = self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise EntityNotFoundError(f"Transaction '{transaction_id}' not found")

        validate_refund_amount(transaction.total).raise_for_failure()
        transaction.refund(reason.strip(), self._clock())
        try:
            self._transaction_repo.save(transaction)
        except PersistenceError as exc:
            logger.error("Failed to refund %s: %s", transaction.transaction_number, exc)
            raise PersistenceError("Failed to process refund. Please try again.") from exc

        logger.info("Refunded %s of %s", transaction.total, transaction.transaction_number)
        return TransactionDTO.from_transaction(transaction)
