"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from hpos.domain.model.cart import Cart
from hpos.domain.service.authorization import AuthorizationGate, SharedCodePolicy
from hpos.infrastructure.config import Settings
from hpos.infrastructure.persistence.json_cart_store import JsonCartStore
from hpos.infrastructure.persistence.json_discount_repository import (
    JsonDiscountRepository,
)
from hpos.infrastructure.persistence.json_guest_directory import JsonGuestDirectory
from hpos.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from hpos.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def discount_repository(settings: Settings) -> JsonDiscountRepository:
    return JsonDiscountRepository(settings.data_dir / "discounts.json")


def guest_directory(settings: Settings) -> JsonGuestDirectory:
    return JsonGuestDirectory(settings.data_dir / "bookings.json")


def transaction_repository(settings: Settings) -> JsonTransactionRepository:
    return JsonTransactionRepository(settings.data_dir / "transactions.json")


def cart_store(settings: Settings) -> JsonCartStore:
    return JsonCartStore(settings.data_dir / "session" / "cart.json")


def authorization_gate(settings: Settings) -> AuthorizationGate:
    return AuthorizationGate(SharedCodePolicy(settings.manager_code))


@contextmanager
def session_cart(settings: Settings) -> Iterator[Cart]:
    """Load the session cart and write it back however the command ends.

    Failed operations leave the cart unchanged, except for deliberate
    clean-ups such as dropping a guest who is no longer checked in.
    """
    store = cart_store(settings)
    cart = store.load()
    try:
        yield cart
    finally:
        store.save(cart)
