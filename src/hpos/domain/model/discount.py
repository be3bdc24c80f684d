"""Discount reference data.

Discounts are owned by an external catalog; the core only reads them.
Value ranges are *not* enforced on construction: a badly configured
discount is rejected by ``validate_discount_applicability`` when staff try
to apply it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from hpos.domain.model.value_objects import Money


class DiscountKind(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class Discount:
    id: str
    code: str
    kind: DiscountKind
    value: Decimal
    description: str = ""
    min_subtotal: Money | None = None
    active: bool = True

    def matches_code(self, code: str) -> bool:
        return self.code.lower() == code.strip().lower()

    def amount_for(self, subtotal: Money) -> Money:
        """Discount amount for *subtotal*, at full precision.

        Percentage -> subtotal x value / 100; Fixed -> value.
        """
        if self.kind is DiscountKind.PERCENTAGE:
            return subtotal.scaled(self.value / Decimal(100))
        return Money(self.value)

    @property
    def label(self) -> str:
        if self.kind is DiscountKind.PERCENTAGE:
            return f"{self.value.normalize():f}% off"
        return f"{Money(self.value)} off"
