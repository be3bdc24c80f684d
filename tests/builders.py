"""Shared test data."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from hpos.domain.model.discount import Discount, DiscountKind
from hpos.domain.model.guest import Booking
from hpos.domain.model.product import Product
from hpos.domain.model.value_objects import Money

FIXED_NOW = datetime(2025, 1, 15, 14, 30, 22, tzinfo=timezone.utc)


def product(pid: str = "p1", price: str = "150", name: str | None = None,
            available: bool = True) -> Product:
    return Product(id=pid, name=name or f"Item {pid}", price=Money.of(price), available=available)


def percentage(value: str, min_subtotal: str | None = None, code: str = "PCT",
               did: str = "d1", active: bool = True) -> Discount:
    return Discount(
        id=did,
        code=code,
        kind=DiscountKind.PERCENTAGE,
        value=Decimal(value),
        min_subtotal=Money.of(min_subtotal) if min_subtotal else None,
        active=active,
    )


def fixed(value: str, min_subtotal: str | None = None, code: str = "FIX",
          did: str = "d2", active: bool = True) -> Discount:
    return Discount(
        id=did,
        code=code,
        kind=DiscountKind.FIXED,
        value=Decimal(value),
        min_subtotal=Money.of(min_subtotal) if min_subtotal else None,
        active=active,
    )


def booking(guest_id: str = "g1", name: str = "Maria Santos", room: str = "101",
            status: str = "checked_in", total_price: str = "0") -> Booking:
    return Booking(
        id=f"b-{guest_id}",
        guest_id=guest_id,
        guest_name=name,
        room_id=room,
        room_type="Deluxe",
        status=status,
        total_price=Money.of(total_price),
    )
