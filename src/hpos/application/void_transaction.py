"""Application service: Void a transaction.

Managers void directly; front-desk staff must supply the manager code.
Voiding is a bookkeeping mark only, it does not reverse a payment.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from hpos.application.dto import TransactionDTO
from hpos.domain.exceptions import EntityNotFoundError, PersistenceError
from hpos.domain.model.transaction import utcnow
from hpos.domain.repository.transaction_repository import TransactionRepository
from hpos.domain.service.authorization import AuthorizationGate, Role

logger = logging.getLogger("hpos.transactions")


class VoidTransactionHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        gate: AuthorizationGate,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._gate = gate
        self._clock = clock

    def handle(
        self,
        transaction_id: str,
        role: Role,
        manager_code: str | None = None,
    ) -> TransactionDTO:
        self._gate.authorize_void(role, manager_code)

        transaction = self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise EntityNotFoundError(f"Transaction '{transaction_id}' not found")

        transaction.void(self._clock())
        try:
            self._transaction_repo.save(transaction)
        except PersistenceError as exc:
            logger.error("Failed to void %s: %s", transaction.transaction_number, exc)
            raise PersistenceError("Failed to void transaction. Please try again.") from exc

        logger.info("Voided %s (by %s)", transaction.transaction_number, role.value)
        return TransactionDTO.from_transaction(transaction)
