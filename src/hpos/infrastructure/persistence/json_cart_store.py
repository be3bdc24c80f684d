"""Keeps one staff session's cart between CLI invocations.

The cart is session state, not a business record: this store simply
snapshots it, including the applied discount and the selected guest.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from hpos.domain.model.cart import Cart, CartLine
from hpos.domain.model.discount import Discount, DiscountKind
from hpos.domain.model.guest import ActiveGuest
from hpos.domain.model.value_objects import Money
from hpos.infrastructure.persistence.json_file import JsonFile


def _empty_session() -> dict:
    return {"lines": [], "discount": None, "guest": None}


class JsonCartStore:

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=_empty_session)

    def load(self) -> Cart:
        raw = self._file.load()
        return Cart(
            lines=[
                CartLine(
                    product_id=line["product_id"],
                    name=line["name"],
                    unit_price=Money(Decimal(line["unit_price"])),
                    quantity=line["quantity"],
                )
                for line in raw.get("lines", [])
            ],
            discount=self._discount_from_raw(raw.get("discount")),
            guest=ActiveGuest(**raw["guest"]) if raw.get("guest") else None,
        )

    def save(self, cart: Cart) -> None:
        self._file.persist(
            {
                "lines": [
                    {
                        "product_id": line.product_id,
                        "name": line.name,
                        "unit_price": str(line.unit_price.amount),
                        "quantity": line.quantity,
                    }
                    for line in cart.lines
                ],
                "discount": self._discount_to_raw(cart.discount),
                "guest": self._guest_to_raw(cart.guest),
            }
        )

    @staticmethod
    def _discount_to_raw(discount: Discount | None) -> dict | None:
        if discount is None:
            return None
        return {
            "id": discount.id,
            "code": discount.code,
            "kind": discount.kind.value,
            "value": str(discount.value),
            "description": discount.description,
            "min_subtotal": str(discount.min_subtotal.amount) if discount.min_subtotal else None,
            "active": discount.active,
        }

    @staticmethod
    def _discount_from_raw(raw: dict | None) -> Discount | None:
        if not raw:
            return None
        return Discount(
            id=raw["id"],
            code=raw["code"],
            kind=DiscountKind(raw["kind"]),
            value=Decimal(raw["value"]),
            description=raw.get("description", ""),
            min_subtotal=Money(Decimal(raw["min_subtotal"])) if raw.get("min_subtotal") else None,
            active=raw.get("active", True),
        )

    @staticmethod
    def _guest_to_raw(guest: ActiveGuest | None) -> dict | None:
        if guest is None:
            return None
        return {
            "guest_id": guest.guest_id,
            "guest_name": guest.guest_name,
            "room_id": guest.room_id,
            "room_type": guest.room_type,
            "booking_id": guest.booking_id,
        }
