"""Transaction aggregate — the immutable financial record of a sale.

A transaction is created from a cart snapshot at checkout and afterwards
only moves through the status machine below; its amounts and items never
change.

    (walk-in)   ──────────────► COMPLETED ──► REFUNDED
    (guest tab) ──► PENDING ──► COMPLETED
                       │
    any status except VOIDED ──► VOIDED
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from hpos.domain.exceptions import InvalidTransitionError, ValidationError
from hpos.domain.model.cart import CartLine, CartTotals
from hpos.domain.model.guest import WALK_IN, GuestRef, IdentifiedGuest
from hpos.domain.model.validation import (
    FieldTag,
    ValidationResult,
    validate_payment_method,
)
from hpos.domain.model.value_objects import Money, Quantity


class TransactionStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"
    VOIDED = "voided"


class PaymentMethod(Enum):
    CARD = "card"
    CASH = "cash"
    PENDING = "pending"
    ROOM_CHARGE = "room charge"
    CREDIT_CARD = "credit card"
    DEBIT_CARD = "debit card"

    @classmethod
    def parse(cls, raw: str | None) -> PaymentMethod:
        """Case-insensitive lookup of a *settling* method ("pending" excluded)."""
        result = validate_payment_method(raw)
        if not result.ok:
            raise ValidationError(result.message, field=FieldTag.PAYMENT_METHOD.value)
        return cls(raw.strip().lower())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_transaction_number(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """``TX`` + ``YYYYMMDDHHMMSS`` (UTC) + 3 zero-padded random digits."""
    now = (now or utcnow()).astimezone(timezone.utc)
    suffix = (rng or random).randint(0, 999)
    return f"TX{now:%Y%m%d%H%M%S}{suffix:03d}"


@dataclass(frozen=True)
class TransactionItem:
    """One cart line frozen at checkout time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    id: str | None = None

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_cart_line(line: CartLine) -> TransactionItem:
        return TransactionItem(
            product_id=line.product_id,
            product_name=line.name,
            quantity=Quantity(line.quantity),
            unit_price=line.unit_price,
        )


@dataclass
class Transaction:
    """Aggregate root for point-of-sale transactions.

    Use ``open_tab()`` / ``pay_now()`` for new transactions.  ``__init__``
    is left plain so repositories can reconstitute persisted records.
    """

    id: str | None
    transaction_number: str
    subtotal: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod
    status: TransactionStatus
    guest: GuestRef
    items: list[TransactionItem]
    discount: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=utcnow)
    paid_at: datetime | None = None
    voided_at: datetime | None = None
    refunded_at: datetime | None = None
    refund_reason: str | None = None

    # --- Factories (used for NEW transactions only) ---------------------------

    @staticmethod
    def open_tab(
        guest: IdentifiedGuest,
        lines: list[CartLine],
        totals: CartTotals,
        transaction_number: str,
        now: datetime,
    ) -> Transaction:
        """A pending charge on a guest's room tab."""
        return Transaction._from_lines(
            lines,
            totals,
            transaction_number=transaction_number,
            payment_method=PaymentMethod.PENDING,
            status=TransactionStatus.PENDING,
            guest=guest,
            created_at=now,
        )

    @staticmethod
    def pay_now(
        lines: list[CartLine],
        totals: CartTotals,
        payment_method: PaymentMethod,
        transaction_number: str,
        now: datetime,
    ) -> Transaction:
        """A walk-in sale, completed at the counter."""
        transaction = Transaction._from_lines(
            lines,
            totals,
            transaction_number=transaction_number,
            payment_method=payment_method,
            status=TransactionStatus.COMPLETED,
            guest=WALK_IN,
            created_at=now,
        )
        transaction.paid_at = now
        return transaction

    @staticmethod
    def _from_lines(
        lines: list[CartLine],
        totals: CartTotals,
        **kwargs,
    ) -> Transaction:
        if not lines:
            raise ValidationError("Cart is empty", field=FieldTag.CART.value)
        rounded = totals.rounded()
        return Transaction(
            id=None,
            subtotal=rounded.subtotal,
            discount=rounded.discount,
            tax=rounded.tax,
            total=rounded.total,
            items=[TransactionItem.from_cart_line(line) for line in lines],
            **kwargs,
        )

    # --- State transitions ----------------------------------------------------

    def can_settle(self) -> ValidationResult:
        if self.status is not TransactionStatus.PENDING:
            return ValidationResult.failure(
                f"Cannot settle transaction {self.transaction_number} "
                f"(current status is {self.status.value}, expected pending)",
                FieldTag.TRANSACTION_NUMBER,
            )
        return ValidationResult.success()

    def settle(self, method: PaymentMethod, now: datetime) -> None:
        """Transition PENDING -> COMPLETED, recording how it was paid."""
        check = self.can_settle()
        if not check.ok:
            raise InvalidTransitionError(check.message)
        if method is PaymentMethod.PENDING:
            raise ValidationError("Invalid payment method", field=FieldTag.PAYMENT_METHOD.value)
        self.status = TransactionStatus.COMPLETED
        self.payment_method = method
        self.paid_at = now

    def void(self, now: datetime) -> None:
        """Mark the transaction voided.  Bookkeeping only; no money moves."""
        if self.status is TransactionStatus.VOIDED:
            raise InvalidTransitionError(
                f"Transaction {self.transaction_number} is already voided"
            )
        self.status = TransactionStatus.VOIDED
        self.voided_at = now

    def refund(self, reason: str, now: datetime) -> None:
        """Transition COMPLETED -> REFUNDED."""
        if self.status is not TransactionStatus.COMPLETED:
            raise InvalidTransitionError(
                f"Cannot refund transaction {self.transaction_number} "
                f"(current status is {self.status.value}, expected completed)"
            )
        self.status = TransactionStatus.REFUNDED
        self.refunded_at = now
        self.refund_reason = reason

    # --- Computed properties --------------------------------------------------

    @property
    def is_walk_in(self) -> bool:
        return not isinstance(self.guest, IdentifiedGuest)

    @property
    def guest_id(self) -> str | None:
        return self.guest.guest_id

    @property
    def guest_name(self) -> str:
        return self.guest.guest_name

    @property
    def is_pending(self) -> bool:
        return self.status is TransactionStatus.PENDING
