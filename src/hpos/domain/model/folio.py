"""Guest folio — the consolidated view of one guest's charges.

Derived, never persisted: it is rebuilt from the transaction store after
every checkout, settlement or void so totals are never stale.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hpos.domain.model.transaction import Transaction, TransactionStatus
from hpos.domain.model.validation import ErrorKind, FieldTag, ValidationResult
from hpos.domain.model.value_objects import Money


def _sum_totals(transactions: list[Transaction]) -> Money:
    result = Money.zero()
    for transaction in transactions:
        result = result + transaction.total
    return result


@dataclass(frozen=True)
class GuestFolio:
    guest_id: str
    guest_name: str
    transactions: tuple[Transaction, ...]
    room_charge: Money = field(default_factory=Money.zero)

    def with_status(self, status: TransactionStatus) -> list[Transaction]:
        return [t for t in self.transactions if t.status is status]

    @property
    def pending(self) -> list[Transaction]:
        return self.with_status(TransactionStatus.PENDING)

    @property
    def completed(self) -> list[Transaction]:
        return self.with_status(TransactionStatus.COMPLETED)

    @property
    def voided(self) -> list[Transaction]:
        return self.with_status(TransactionStatus.VOIDED)

    @property
    def pending_ids(self) -> list[str]:
        return [t.id for t in self.pending]

    @property
    def pending_total(self) -> Money:
        return _sum_totals(self.pending)

    @property
    def total_paid(self) -> Money:
        """Completed charges plus the room-charge baseline from the booking."""
        return _sum_totals(self.completed) + self.room_charge

    def find_pending(self, transaction_id: str) -> Transaction | None:
        for transaction in self.pending:
            if transaction.id == transaction_id:
                return transaction
        return None


@dataclass
class PaymentSelection:
    """Which of a folio's pending transactions staff are about to pay.

    Order of selection is preserved; settlement follows it.
    """

    folio: GuestFolio
    selected_ids: list[str] = field(default_factory=list)

    def toggle(self, transaction_id: str) -> ValidationResult:
        if self.folio.find_pending(transaction_id) is None:
            return ValidationResult.failure(
                f"Transaction '{transaction_id}' is not a pending charge for this guest",
                FieldTag.SELECTION,
                kind=ErrorKind.NOT_FOUND,
            )
        if transaction_id in self.selected_ids:
            self.selected_ids.remove(transaction_id)
        else:
            self.selected_ids.append(transaction_id)
        return ValidationResult.success()

    def select(self, transaction_ids: list[str]) -> ValidationResult:
        """Toggle each id in turn; stops at the first unknown id."""
        for transaction_id in transaction_ids:
            result = self.toggle(transaction_id)
            if not result.ok:
                return result
        return ValidationResult.success()

    def select_all(self) -> None:
        """Select every pending charge, or clear the selection if all are selected."""
        pending_ids = self.folio.pending_ids
        if len(self.selected_ids) == len(pending_ids):
            self.selected_ids = []
        else:
            self.selected_ids = list(pending_ids)

    def clear(self) -> None:
        self.selected_ids = []

    @property
    def is_empty(self) -> bool:
        return not self.selected_ids

    @property
    def all_selected(self) -> bool:
        return len(self.selected_ids) == len(self.folio.pending_ids)

    @property
    def selected(self) -> list[Transaction]:
        return [
            t for t in (self.folio.find_pending(i) for i in self.selected_ids)
            if t is not None
        ]

    @property
    def selected_total(self) -> Money:
        return _sum_totals(self.selected)
