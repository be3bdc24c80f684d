"""Validation rules for the point-of-sale core.

Every rule is a pure function returning a ``ValidationResult``.  Expected
business-rule violations are *values*, not exceptions: callers branch on
``result.ok`` and surface ``result.message`` next to ``result.field``.
Application handlers call ``raise_for_failure()`` when they want the
exception form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from hpos.domain.exceptions import (
    EntityNotFoundError,
    StaleReferenceError,
    ValidationError,
)
from hpos.domain.model.discount import Discount, DiscountKind
from hpos.domain.model.guest import Guest, Room
from hpos.domain.model.value_objects import CURRENCY_SYMBOL, Money


MAX_LINE_QUANTITY = 99
MAX_CART_TOTAL = Decimal("50000")
MAX_REFUND_AMOUNT = Decimal("10000")
MIN_DISCOUNT_CODE_LENGTH = 3
MIN_REFUND_REASON_LENGTH = 10
MAX_REFUND_REASON_LENGTH = 500
MAX_SEARCH_QUERY_LENGTH = 100

ALLOWED_PAYMENT_METHODS = frozenset(
    {"card", "cash", "room charge", "credit card", "debit card"}
)

# TX + 14-digit UTC timestamp + 3-digit random suffix
TRANSACTION_NUMBER_PATTERN = re.compile(r"TX[0-9]{14}[0-9]{3}")

_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")


class ErrorKind(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STALE_REFERENCE = "stale_reference"


class FieldTag(Enum):
    QUANTITY = "quantity"
    TOTAL = "total"
    CART = "cart"
    DISCOUNT_CODE = "discount_code"
    DISCOUNT = "discount"
    PAYMENT_METHOD = "payment_method"
    TENDERED = "tendered"
    ROOM_CHARGE = "room_charge"
    REFUND_REASON = "refund_reason"
    REFUND_AMOUNT = "refund_amount"
    PRODUCT = "product"
    SEARCH = "search"
    TRANSACTION_NUMBER = "transaction_number"
    GUEST = "guest"
    ROOM = "room"
    SELECTION = "selection"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a rule check.

    ``ok`` results carry nothing else; failures always carry a kind,
    a human-readable message and the field the message belongs to.
    """

    ok: bool
    kind: ErrorKind | None = None
    message: str | None = None
    field: FieldTag | None = None

    @classmethod
    def success(cls) -> ValidationResult:
        return _SUCCESS

    @classmethod
    def failure(
        cls,
        message: str,
        field: FieldTag,
        kind: ErrorKind = ErrorKind.VALIDATION,
    ) -> ValidationResult:
        return cls(ok=False, kind=kind, message=message, field=field)

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_failure(self) -> None:
        """Raise the exception matching this result's kind, if it failed."""
        if self.ok:
            return
        if self.kind is ErrorKind.NOT_FOUND:
            raise EntityNotFoundError(self.message)
        if self.kind is ErrorKind.STALE_REFERENCE:
            raise StaleReferenceError(self.message)
        raise ValidationError(
            self.message or "Validation failed",
            field=self.field.value if self.field else None,
        )


_SUCCESS = ValidationResult(ok=True)


def _money_limit(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,}"


# --- Cart ---------------------------------------------------------------------


def validate_quantity(quantity: int, max_quantity: int = MAX_LINE_QUANTITY) -> ValidationResult:
    if quantity < 1:
        return ValidationResult.failure("Quantity must be at least 1", FieldTag.QUANTITY)
    if quantity > max_quantity:
        return ValidationResult.failure(
            f"Maximum quantity is {max_quantity}", FieldTag.QUANTITY
        )
    return ValidationResult.success()


def validate_cart_total(total: Money, max_total: Decimal = MAX_CART_TOTAL) -> ValidationResult:
    if total.amount <= 0:
        return ValidationResult.failure(
            "Cart total must be greater than 0", FieldTag.TOTAL
        )
    if total.amount > max_total:
        return ValidationResult.failure(
            f"Transaction total cannot exceed {_money_limit(max_total)}", FieldTag.TOTAL
        )
    return ValidationResult.success()


# --- Discounts ----------------------------------------------------------------


def validate_discount_code(code: str | None) -> ValidationResult:
    if not code or not code.strip():
        return ValidationResult.failure(
            "Discount code is required", FieldTag.DISCOUNT_CODE
        )
    if len(code) < MIN_DISCOUNT_CODE_LENGTH:
        return ValidationResult.failure(
            f"Discount code must be at least {MIN_DISCOUNT_CODE_LENGTH} characters",
            FieldTag.DISCOUNT_CODE,
        )
    if not _ALPHANUMERIC.fullmatch(code):
        return ValidationResult.failure(
            "Discount code can only contain letters and numbers",
            FieldTag.DISCOUNT_CODE,
        )
    return ValidationResult.success()


def validate_discount_applicability(subtotal: Money, discount: Discount) -> ValidationResult:
    if discount.min_subtotal is not None and subtotal < discount.min_subtotal:
        return ValidationResult.failure(
            f"Minimum purchase of {discount.min_subtotal} required for this discount",
            FieldTag.DISCOUNT,
        )
    if discount.kind is DiscountKind.PERCENTAGE and not (0 <= discount.value <= 100):
        return ValidationResult.failure(
            "Percentage discount must be between 0% and 100%", FieldTag.DISCOUNT
        )
    if discount.kind is DiscountKind.FIXED and discount.value <= 0:
        return ValidationResult.failure(
            "Fixed discount must be greater than 0", FieldTag.DISCOUNT
        )
    return ValidationResult.success()


# --- Payment ------------------------------------------------------------------


def validate_payment_method(method: str | None) -> ValidationResult:
    if not method or not method.strip():
        return ValidationResult.failure(
            "Payment method is required", FieldTag.PAYMENT_METHOD
        )
    if method.lower() not in ALLOWED_PAYMENT_METHODS:
        return ValidationResult.failure("Invalid payment method", FieldTag.PAYMENT_METHOD)
    return ValidationResult.success()


def validate_room_charge(guest_id: str | None, booking_id: str | None) -> ValidationResult:
    if not guest_id or not booking_id:
        return ValidationResult.failure(
            "Guest and booking information required for room charge",
            FieldTag.ROOM_CHARGE,
        )
    return ValidationResult.success()


# --- Refunds ------------------------------------------------------------------


def validate_refund_reason(reason: str | None) -> ValidationResult:
    if not reason or not reason.strip():
        return ValidationResult.failure(
            "Refund reason is required", FieldTag.REFUND_REASON
        )
    if len(reason) < MIN_REFUND_REASON_LENGTH:
        return ValidationResult.failure(
            f"Refund reason must be at least {MIN_REFUND_REASON_LENGTH} characters",
            FieldTag.REFUND_REASON,
        )
    if len(reason) > MAX_REFUND_REASON_LENGTH:
        return ValidationResult.failure(
            f"Refund reason cannot exceed {MAX_REFUND_REASON_LENGTH} characters",
            FieldTag.REFUND_REASON,
        )
    return ValidationResult.success()


def validate_refund_amount(
    amount: Money, max_refund: Decimal = MAX_REFUND_AMOUNT
) -> ValidationResult:
    if amount.amount <= 0:
        return ValidationResult.failure(
            "Refund amount must be greater than 0", FieldTag.REFUND_AMOUNT
        )
    if amount.amount > max_refund:
        return ValidationResult.failure(
            f"Refund amount cannot exceed {_money_limit(max_refund)}",
            FieldTag.REFUND_AMOUNT,
        )
    return ValidationResult.success()


# --- Catalog ------------------------------------------------------------------


def validate_product_availability(available: bool, stock: int | None = None) -> ValidationResult:
    if not available:
        return ValidationResult.failure("Product is not available", FieldTag.PRODUCT)
    if stock is not None and stock <= 0:
        return ValidationResult.failure("Product is out of stock", FieldTag.PRODUCT)
    return ValidationResult.success()


def validate_search_query(query: str | None) -> ValidationResult:
    if query and len(query) > MAX_SEARCH_QUERY_LENGTH:
        return ValidationResult.failure("Search query is too long", FieldTag.SEARCH)
    return ValidationResult.success()


# --- Transactions & guests ----------------------------------------------------


def validate_transaction_number(number: str | None) -> ValidationResult:
    if not number or not number.strip():
        return ValidationResult.failure(
            "Transaction number is required", FieldTag.TRANSACTION_NUMBER
        )
    if not TRANSACTION_NUMBER_PATTERN.fullmatch(number):
        return ValidationResult.failure(
            "Invalid transaction number format", FieldTag.TRANSACTION_NUMBER
        )
    return ValidationResult.success()


def validate_guest_assignment(guest: Guest | None, room: Room | None) -> ValidationResult:
    if guest is None:
        return ValidationResult.failure("Guest selection is required", FieldTag.GUEST)
    if room is None:
        return ValidationResult.failure("Room assignment is required", FieldTag.ROOM)
    if not guest.first_name or not guest.last_name:
        return ValidationResult.failure("Guest name is required", FieldTag.GUEST)
    if not room.room_number:
        return ValidationResult.failure("Room number is required", FieldTag.ROOM)
    return ValidationResult.success()


# --- Helpers ------------------------------------------------------------------


def first_failure(results: Iterable[ValidationResult]) -> ValidationResult | None:
    for result in results:
        if not result.ok:
            return result
    return None


def has_failures(results: Iterable[ValidationResult]) -> bool:
    return first_failure(results) is not None
