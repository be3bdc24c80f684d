"""Cart aggregate — the in-progress sale of one staff session.

The cart owns its lines and at most one applied discount.  Mutations
never raise for business-rule violations; they return a
``ValidationResult`` and leave the cart unchanged when it fails.

Invariants:
- no two lines share a ``product_id`` (adding merges into the line)
- every line has 1 <= quantity <= ``MAX_LINE_QUANTITY``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from hpos.domain.model.discount import Discount
from hpos.domain.model.guest import WALK_IN, ActiveGuest, GuestRef
from hpos.domain.model.product import Product
from hpos.domain.model.validation import (
    ErrorKind,
    FieldTag,
    ValidationResult,
    validate_product_availability,
    validate_quantity,
)
from hpos.domain.model.value_objects import Money

TAX_RATE = Decimal("0.10")


@dataclass
class CartLine:
    product_id: str
    name: str
    unit_price: Money  # snapshot of the catalog price when added
    quantity: int = 1

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    subtotal: Money
    discount: Money
    discounted_subtotal: Money
    tax: Money
    total: Money

    def rounded(self) -> CartTotals:
        """2-digit rounding for display and persistence."""
        return CartTotals(
            subtotal=self.subtotal.rounded(),
            discount=self.discount.rounded(),
            discounted_subtotal=self.discounted_subtotal.rounded(),
            tax=self.tax.rounded(),
            total=self.total.rounded(),
        )


def compute_totals(subtotal: Money, discount: Discount | None = None) -> CartTotals:
    """Price a subtotal: discount, then 10% tax on the discounted amount.

    A fixed discount larger than the subtotal is capped at the subtotal so
    the discounted subtotal never goes negative.  This departs from plain
    subtraction, which would show a negative total for such a cart; the
    resulting zero total is still rejected at checkout.
    """
    discount_amount = discount.amount_for(subtotal) if discount else Money.zero()
    if discount_amount > subtotal:
        discount_amount = subtotal
    discounted = subtotal - discount_amount
    tax = discounted.scaled(TAX_RATE).rounded()
    return CartTotals(
        subtotal=subtotal,
        discount=discount_amount,
        discounted_subtotal=discounted,
        tax=tax,
        total=discounted + tax,
    )


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)
    discount: Discount | None = None
    guest: ActiveGuest | None = None

    # --- Line operations ------------------------------------------------------

    def add_line(self, product: Product) -> ValidationResult:
        """Add one unit of *product*, merging into an existing line."""
        availability = validate_product_availability(product.available)
        if not availability.ok:
            return availability

        line = self.find_line(product.id)
        if line is None:
            self.lines.append(
                CartLine(product_id=product.id, name=product.name, unit_price=product.price)
            )
            return ValidationResult.success()

        result = validate_quantity(line.quantity + 1)
        if result.ok:
            line.quantity += 1
        return result

    def change_quantity(self, product_id: str, delta: int) -> ValidationResult:
        """Adjust a line by *delta*; reaching zero or below removes it."""
        line = self.find_line(product_id)
        if line is None:
            return ValidationResult.failure(
                f"Product '{product_id}' is not in the cart",
                FieldTag.PRODUCT,
                kind=ErrorKind.NOT_FOUND,
            )

        new_quantity = line.quantity + delta
        if new_quantity <= 0:
            self.lines.remove(line)
            return ValidationResult.success()

        result = validate_quantity(new_quantity)
        if result.ok:
            line.quantity = new_quantity
        return result

    def remove_line(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self) -> None:
        """Empty the cart and release any applied discount."""
        self.lines = []
        self.discount = None

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    # --- Discount -------------------------------------------------------------

    def apply_discount(self, discount: Discount) -> None:
        """Replace the active discount.  Applicability is checked by the engine."""
        self.discount = discount

    def remove_discount(self) -> None:
        self.discount = None

    # --- Guest ----------------------------------------------------------------

    def select_guest(self, guest: ActiveGuest) -> None:
        """Charge this cart to *guest*'s tab.

        Discounts only apply to walk-in sales, so any applied discount is
        released.
        """
        self.guest = guest
        self.discount = None

    def clear_guest(self) -> None:
        self.guest = None

    @property
    def guest_ref(self) -> GuestRef:
        return self.guest.ref() if self.guest is not None else WALK_IN

    # --- Computed properties --------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    def compute_totals(self) -> CartTotals:
        return compute_totals(self.subtotal, self.discount)

    def compute_tab_totals(self) -> CartTotals:
        """Totals for a guest-tab charge: the discount is never applied."""
        return compute_totals(self.subtotal)
