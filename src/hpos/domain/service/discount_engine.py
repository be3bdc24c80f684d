"""Domain service: Discount Engine.

Resolves a discount (typed code or catalog pick), checks it against the
cart's current subtotal and makes it the cart's single active discount.
Both entry paths return a ``ValidationResult`` and leave the cart
untouched on failure.

An applied discount is not re-checked when the cart later changes; a
subtotal that drops below ``min_subtotal`` keeps the discount.
"""

from __future__ import annotations

import logging

from hpos.domain.model.cart import Cart
from hpos.domain.model.discount import Discount
from hpos.domain.model.validation import (
    ErrorKind,
    FieldTag,
    ValidationResult,
    validate_discount_applicability,
    validate_discount_code,
)
from hpos.domain.repository.discount_repository import DiscountRepository

logger = logging.getLogger("hpos.discounts")


class DiscountEngine:

    def __init__(self, discount_repo: DiscountRepository) -> None:
        self._discount_repo = discount_repo

    def apply_code(self, cart: Cart, code: str) -> ValidationResult:
        """Code entry: format check, lookup among active discounts, applicability."""
        result = validate_discount_code(code)
        if not result.ok:
            return result

        discount = self._discount_repo.find_active_by_code(code)
        if discount is None:
            logger.info("Discount code %r not found", code)
            return ValidationResult.failure(
                "Invalid or expired discount code",
                FieldTag.DISCOUNT_CODE,
                kind=ErrorKind.NOT_FOUND,
            )
        return self.apply(cart, discount)

    def apply(self, cart: Cart, discount: Discount) -> ValidationResult:
        """Catalog selection: applicability check only."""
        if cart.guest is not None:
            return ValidationResult.failure(
                "Discounts apply only to walk-in sales",
                FieldTag.DISCOUNT,
            )

        result = validate_discount_applicability(cart.subtotal, discount)
        if not result.ok:
            logger.info("Discount %s rejected: %s", discount.code, result.message)
            return result

        cart.apply_discount(discount)
        logger.info("Discount applied: %s", discount.code)
        return result

    @staticmethod
    def remove(cart: Cart) -> None:
        cart.remove_discount()
