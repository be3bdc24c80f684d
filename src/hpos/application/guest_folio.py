"""Application services: load a guest's folio and pay a selection of it.

Paying a selection settles each transaction in turn.  There is no
cross-transaction rollback: if one settlement fails, the ones before it
stay completed and the result reports exactly which were paid.
"""

from __future__ import annotations

import logging

from hpos.application.dto import BatchSettlementDTO
from hpos.application.settle_transaction import SettleTransactionHandler
from hpos.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from hpos.domain.model.folio import GuestFolio, PaymentSelection
from hpos.domain.model.transaction import PaymentMethod
from hpos.domain.model.validation import FieldTag
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.guest_directory import GuestDirectory
from hpos.domain.repository.transaction_repository import TransactionRepository

logger = logging.getLogger("hpos.folio")


class LoadFolioHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        guest_directory: GuestDirectory,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._guest_directory = guest_directory

    def handle(self, guest_id: str) -> GuestFolio:
        transactions = self._transaction_repo.list_by_guest(guest_id)
        name = self._guest_directory.guest_name(guest_id)
        if name is None:
            if not transactions:
                raise EntityNotFoundError(f"Guest '{guest_id}' not found")
            name = transactions[0].guest_name

        return GuestFolio(
            guest_id=guest_id,
            guest_name=name,
            transactions=tuple(transactions),
            room_charge=self._guest_directory.room_charge_for(guest_id),
        )


class PaySelectedHandler:

    def __init__(self, settle: SettleTransactionHandler) -> None:
        self._settle = settle

    def handle(self, selection: PaymentSelection, payment_method: str) -> BatchSettlementDTO:
        if selection.is_empty:
            raise ValidationError(
                "Please select transactions to pay", field=FieldTag.SELECTION.value
            )
        method = PaymentMethod.parse(payment_method)

        settled_ids: list[str] = []
        settled_total = Money.zero()
        failed_id: str | None = None
        error: str | None = None

        for transaction in selection.selected:
            try:
                self._settle.handle(transaction.id, method.value)
            except DomainException as exc:
                failed_id, error = transaction.id, str(exc)
                logger.error(
                    "Batch payment stopped at %s after %d settled: %s",
                    transaction.transaction_number,
                    len(settled_ids),
                    exc,
                )
                break
            settled_ids.append(transaction.id)
            settled_total = settled_total + transaction.total

        selection.clear()
        if failed_id is None:
            logger.info(
                "Payment of %s processed via %s for %s",
                settled_total,
                method.value,
                selection.folio.guest_name,
            )
        return BatchSettlementDTO(
            settled_ids=settled_ids,
            settled_total=str(settled_total),
            payment_method=method.value,
            failed_id=failed_id,
            error=error,
        )
