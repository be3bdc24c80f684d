"""Application service: Checkout use case.

Turns the cart into a persisted transaction.  Every business rule is
checked before the store is touched, and the cart is only cleared once
the transaction and its items are safely written.

Two modes:
- walk-in: paid on the spot by card or cash -> COMPLETED
- guest tab: charged to a checked-in guest -> PENDING, settled later
  from the guest's folio.  Guest tabs never carry the cart discount.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from hpos.application.dto import ReceiptDTO, TransactionDTO
from hpos.domain.exceptions import (
    PersistenceError,
    StaleReferenceError,
    ValidationError,
)
from hpos.domain.model.cart import Cart
from hpos.domain.model.transaction import (
    PaymentMethod,
    Transaction,
    generate_transaction_number,
    utcnow,
)
from hpos.domain.model.validation import (
    FieldTag,
    validate_cart_total,
    validate_room_charge,
)
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.guest_directory import GuestDirectory
from hpos.domain.repository.transaction_repository import TransactionRepository

logger = logging.getLogger("hpos.transactions")

WALK_IN_METHODS = (PaymentMethod.CARD, PaymentMethod.CASH)


class CheckoutMode(Enum):
    WALK_IN = "walk-in"
    GUEST_TAB = "guest-tab"


class CheckoutHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        guest_directory: GuestDirectory,
        clock: Callable[[], datetime] = utcnow,
        number_factory: Callable[[datetime], str] = generate_transaction_number,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._guest_directory = guest_directory
        self._clock = clock
        self._number_factory = number_factory

    def handle(
        self,
        cart: Cart,
        mode: CheckoutMode,
        payment_method: str | None = None,
        tendered: str | None = None,
    ) -> ReceiptDTO:
        if cart.is_empty:
            raise ValidationError("Cart is empty", field=FieldTag.CART.value)

        if mode is CheckoutMode.GUEST_TAB:
            return self._charge_to_tab(cart)
        return self._pay_now(cart, payment_method, tendered)

    # --- Guest tab ------------------------------------------------------------

    def _charge_to_tab(self, cart: Cart) -> ReceiptDTO:
        if cart.guest is None:
            raise ValidationError(
                "Select a checked-in guest to charge this order to",
                field=FieldTag.GUEST.value,
            )

        totals = cart.compute_tab_totals()
        validate_cart_total(totals.rounded().total).raise_for_failure()
        validate_room_charge(cart.guest.guest_id, cart.guest.booking_id).raise_for_failure()

        # The guest may have checked out since they were selected.
        guest = self._guest_directory.get_active_guest(cart.guest.guest_id)
        if guest is None:
            stale = cart.guest
            cart.clear_guest()
            logger.info("Tab checkout rejected: guest %s is no longer active", stale.guest_id)
            raise StaleReferenceError(
                "This guest is no longer active. Please select an active guest."
            )

        now = self._clock()
        transaction = Transaction.open_tab(
            guest=guest.ref(),
            lines=cart.lines,
            totals=totals,
            transaction_number=self._number_factory(now),
            now=now,
        )
        self._persist(transaction)
        cart.clear()

        logger.info(
            "Charged %s to %s's tab (%s)",
            transaction.total,
            guest.guest_name,
            transaction.transaction_number,
        )
        return ReceiptDTO(
            transaction=TransactionDTO.from_transaction(transaction),
            room_id=guest.room_id,
        )

    # --- Walk-in --------------------------------------------------------------

    def _pay_now(
        self,
        cart: Cart,
        payment_method: str | None,
        tendered: str | None,
    ) -> ReceiptDTO:
        if cart.guest is not None:
            raise ValidationError(
                "A guest is selected; charge the order to their tab instead",
                field=FieldTag.GUEST.value,
            )

        totals = cart.compute_totals()
        total = totals.rounded().total
        validate_cart_total(total).raise_for_failure()

        method = PaymentMethod.parse(payment_method)
        if method not in WALK_IN_METHODS:
            raise ValidationError(
                "Walk-in sales are paid by card or cash",
                field=FieldTag.PAYMENT_METHOD.value,
            )

        tendered_amount, change = self._cash_change(method, tendered, total)

        now = self._clock()
        transaction = Transaction.pay_now(
            lines=cart.lines,
            totals=totals,
            payment_method=method,
            transaction_number=self._number_factory(now),
            now=now,
        )
        self._persist(transaction)
        cart.clear()

        logger.info(
            "Payment of %s received via %s (%s)",
            transaction.total,
            method.value,
            transaction.transaction_number,
        )
        return ReceiptDTO(
            transaction=TransactionDTO.from_transaction(transaction),
            tendered=str(tendered_amount) if tendered_amount is not None else None,
            change=str(change) if change is not None and not change.is_zero else None,
        )

    @staticmethod
    def _cash_change(
        method: PaymentMethod,
        tendered: str | None,
        total: Money,
    ) -> tuple[Money | None, Money | None]:
        if method is not PaymentMethod.CASH:
            return None, None
        if tendered is None or not str(tendered).strip():
            raise ValidationError(
                "Cash amount tendered is required", field=FieldTag.TENDERED.value
            )
        amount = Money.of(tendered)
        if amount < total:
            raise ValidationError(
                f"Cash amount must be at least {total}", field=FieldTag.TENDERED.value
            )
        return amount, amount - total

    # --- Persistence ----------------------------------------------------------

    def _persist(self, transaction: Transaction) -> None:
        try:
            self._transaction_repo.add(transaction)
        except PersistenceError as exc:
            logger.error(
                "Failed to record transaction %s: %s", transaction.transaction_number, exc
            )
            raise PersistenceError(
                "Failed to record the transaction. The cart was kept; please try again."
            ) from exc
