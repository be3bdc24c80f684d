"""Data Transfer Objects — plain containers that cross layer boundaries.

Monetary fields are pre-formatted strings (e.g. "₱1,250.00") so the CLI
can print them as-is.
"""

from __future__ import annotations

from dataclasses import dataclass

from hpos.domain.model.cart import Cart
from hpos.domain.model.folio import GuestFolio, PaymentSelection
from hpos.domain.model.transaction import Transaction

_TIMESTAMP = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    subtotal: str
    discount_code: str | None
    discount: str
    tax: str
    total: str
    guest_name: str | None
    room_id: str | None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        # Guest tabs are priced without the discount.
        totals = (cart.compute_tab_totals() if cart.guest else cart.compute_totals()).rounded()
        return CartDTO(
            lines=[
                CartLineDTO(
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            subtotal=str(totals.subtotal),
            discount_code=cart.discount.code if cart.discount else None,
            discount=str(totals.discount),
            tax=str(totals.tax),
            total=str(totals.total),
            guest_name=cart.guest.guest_name if cart.guest else None,
            room_id=cart.guest.room_id if cart.guest else None,
        )


@dataclass(frozen=True)
class TransactionItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    total_price: str


@dataclass(frozen=True)
class TransactionDTO:
    id: str
    transaction_number: str
    status: str
    payment_method: str
    guest_id: str | None
    guest_name: str
    items: list[TransactionItemDTO]
    subtotal: str
    discount: str
    tax: str
    total: str
    created_at: str
    paid_at: str | None
    voided_at: str | None

    @staticmethod
    def from_transaction(transaction: Transaction) -> TransactionDTO:
        return TransactionDTO(
            id=transaction.id,  # type: ignore[arg-type]
            transaction_number=transaction.transaction_number,
            status=transaction.status.value,
            payment_method=transaction.payment_method.value,
            guest_id=transaction.guest_id,
            guest_name=transaction.guest_name,
            items=[
                TransactionItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    total_price=str(item.total_price),
                )
                for item in transaction.items
            ],
            subtotal=str(transaction.subtotal),
            discount=str(transaction.discount),
            tax=str(transaction.tax),
            total=str(transaction.total),
            created_at=transaction.created_at.strftime(_TIMESTAMP),
            paid_at=transaction.paid_at.strftime(_TIMESTAMP) if transaction.paid_at else None,
            voided_at=(
                transaction.voided_at.strftime(_TIMESTAMP) if transaction.voided_at else None
            ),
        )


@dataclass(frozen=True)
class ReceiptDTO:
    """Output of a checkout: the persisted transaction plus counter details."""

    transaction: TransactionDTO
    room_id: str | None = None
    tendered: str | None = None
    change: str | None = None


@dataclass(frozen=True)
class FolioDTO:
    guest_id: str
    guest_name: str
    pending: list[TransactionDTO]
    completed: list[TransactionDTO]
    voided: list[TransactionDTO]
    pending_total: str
    total_paid: str
    selected_ids: list[str]
    selected_total: str

    @staticmethod
    def from_folio(folio: GuestFolio, selection: PaymentSelection | None = None) -> FolioDTO:
        selection = selection or PaymentSelection(folio)
        return FolioDTO(
            guest_id=folio.guest_id,
            guest_name=folio.guest_name,
            pending=[TransactionDTO.from_transaction(t) for t in folio.pending],
            completed=[TransactionDTO.from_transaction(t) for t in folio.completed],
            voided=[TransactionDTO.from_transaction(t) for t in folio.voided],
            pending_total=str(folio.pending_total),
            total_paid=str(folio.total_paid),
            selected_ids=list(selection.selected_ids),
            selected_total=str(selection.selected_total),
        )


@dataclass(frozen=True)
class BatchSettlementDTO:
    """Outcome of paying a folio selection.

    Settlement is not atomic across transactions: when ``failed_id`` is
    set, the ids in ``settled_ids`` stay paid.
    """

    settled_ids: list[str]
    settled_total: str
    payment_method: str
    failed_id: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.failed_id is None


@dataclass(frozen=True)
class HistoryDTO:
    transactions: list[TransactionDTO]
    completed_revenue: str
    pending_count: int
    voided_count: int
