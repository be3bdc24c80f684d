"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import copy
from dataclasses import replace

from hpos.domain.exceptions import PersistenceError
from hpos.domain.model.discount import Discount
from hpos.domain.model.guest import ActiveGuest, Booking
from hpos.domain.model.product import Product
from hpos.domain.model.transaction import Transaction, TransactionStatus
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.discount_repository import DiscountRepository
from hpos.domain.repository.guest_directory import GuestDirectory
from hpos.domain.repository.product_repository import ProductRepository
from hpos.domain.repository.transaction_repository import TransactionRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return sorted(self._store.values(), key=lambda p: p.name.lower())


class FakeDiscountRepository(DiscountRepository):

    def __init__(self, discounts: list[Discount] | None = None) -> None:
        self._store: dict[str, Discount] = {d.id: d for d in discounts or []}

    def get_by_id(self, discount_id: str) -> Discount | None:
        return self._store.get(discount_id)

    def list_active(self) -> list[Discount]:
        return [d for d in self._store.values() if d.active]


class FakeGuestDirectory(GuestDirectory):

    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self.bookings: list[Booking] = list(bookings or [])

    def list_active_guests(self) -> list[ActiveGuest]:
        return [ActiveGuest.from_booking(b) for b in self.bookings if b.is_active]

    def room_charge_for(self, guest_id: str) -> Money:
        total = Money.zero()
        for b in self.bookings:
            if b.guest_id == guest_id:
                total = total + b.total_price
        return total

    def guest_name(self, guest_id: str) -> str | None:
        for b in self.bookings:
            if b.guest_id == guest_id:
                return b.guest_name
        return None

    def check_out(self, guest_id: str) -> None:
        self.bookings = [
            replace(b, status="checked_out") if b.guest_id == guest_id else b
            for b in self.bookings
        ]


class FakeTransactionRepository(TransactionRepository):
    """Stores copies, like a real store, so unsaved mutations never leak."""

    def __init__(self) -> None:
        self._store: dict[str, Transaction] = {}
        self._next_id = 1

    def add(self, transaction: Transaction) -> None:
        transaction.id = f"T{self._next_id}"
        self._next_id += 1
        self._store[transaction.id] = copy.deepcopy(transaction)

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        found = self._store.get(transaction_id)
        return copy.deepcopy(found) if found else None

    def list_by_guest(self, guest_id: str) -> list[Transaction]:
        return [copy.deepcopy(t) for t in self._store.values() if t.guest_id == guest_id]

    def list_recent(
        self,
        limit: int = 50,
        status: TransactionStatus | None = None,
    ) -> list[Transaction]:
        found = [
            copy.deepcopy(t)
            for t in self._store.values()
            if status is None or t.status is status
        ]
        found.sort(key=lambda t: t.created_at, reverse=True)
        return found[:limit]

    def save(self, transaction: Transaction) -> None:
        self._store[transaction.id] = copy.deepcopy(transaction)

    def __len__(self) -> int:
        return len(self._store)


class FailingTransactionRepository(FakeTransactionRepository):
    """Fails every ``add``, or every ``save`` for the listed ids."""

    def __init__(self, fail_add: bool = False, fail_save_ids: set[str] | None = None) -> None:
        super().__init__()
        self.fail_add = fail_add
        self.fail_save_ids = fail_save_ids or set()

    def add(self, transaction: Transaction) -> None:
        if self.fail_add:
            raise PersistenceError("store unavailable")
        super().add(transaction)

    def save(self, transaction: Transaction) -> None:
        if transaction.id in self.fail_save_ids:
            raise PersistenceError("store unavailable")
        super().save(transaction)
