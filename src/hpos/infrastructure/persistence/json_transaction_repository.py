"""JSON-file-backed implementation of TransactionRepository.

Transactions and their items live in one document with two collections,
``transactions`` and ``transaction_items``, so writing a transaction and
its items is a single atomic file replace.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from hpos.domain.exceptions import EntityNotFoundError
from hpos.domain.model.guest import WALK_IN, GuestRef, IdentifiedGuest
from hpos.domain.model.transaction import (
    PaymentMethod,
    Transaction,
    TransactionItem,
    TransactionStatus,
)
from hpos.domain.model.validation import validate_transaction_number
from hpos.domain.model.value_objects import Money, Quantity
from hpos.domain.repository.transaction_repository import TransactionRepository
from hpos.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger("hpos.persistence")

WALK_IN_GUEST_ID = "walk-in"


def _empty_store() -> dict:
    return {"transactions": [], "transaction_items": []}


def _new_id() -> str:
    return uuid.uuid4().hex[:10]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _from_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=_empty_store)

    # --- TransactionRepository interface --------------------------------------

    def add(self, transaction: Transaction) -> None:
        store = self._file.load()
        transaction_id = _new_id()
        items = [
            TransactionItem(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                id=_new_id(),
            )
            for item in transaction.items
        ]

        store["transactions"].append(self._to_raw(transaction, transaction_id))
        store["transaction_items"].extend(
            self._item_to_raw(item, transaction_id, transaction.created_at) for item in items
        )
        self._file.persist(store)

        # Only assign ids once the write succeeded.
        transaction.id = transaction_id
        transaction.items = items

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        store = self._file.load()
        for raw in store["transactions"]:
            if raw["id"] == transaction_id:
                return self._to_domain(raw, store["transaction_items"])
        return None

    def list_by_guest(self, guest_id: str) -> list[Transaction]:
        store = self._file.load()
        return self._newest_first(
            self._to_domain(raw, store["transaction_items"])
            for raw in store["transactions"]
            if raw.get("guest_id") == guest_id
        )

    def list_recent(
        self,
        limit: int = 50,
        status: TransactionStatus | None = None,
    ) -> list[Transaction]:
        store = self._file.load()
        transactions = self._newest_first(
            self._to_domain(raw, store["transaction_items"])
            for raw in store["transactions"]
            if status is None or raw["status"] == status.value
        )
        return transactions[:limit]

    def save(self, transaction: Transaction) -> None:
        store = self._file.load()
        for i, raw in enumerate(store["transactions"]):
            if raw["id"] == transaction.id:
                store["transactions"][i] = self._to_raw(transaction, transaction.id)
                break
        else:
            raise EntityNotFoundError(f"Transaction '{transaction.id}' not found")
        self._file.persist(store)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _newest_first(transactions) -> list[Transaction]:
        return sorted(transactions, key=lambda t: t.created_at, reverse=True)

    @staticmethod
    def _to_raw(transaction: Transaction, transaction_id: str) -> dict:
        return {
            "id": transaction_id,
            "transaction_number": transaction.transaction_number,
            "subtotal": str(transaction.subtotal.amount),
            "discount": str(transaction.discount.amount),
            "tax": str(transaction.tax.amount),
            "total": str(transaction.total.amount),
            "payment_method": transaction.payment_method.value,
            "status": transaction.status.value,
            "guest_id": transaction.guest_id or WALK_IN_GUEST_ID,
            "guest_name": transaction.guest_name,
            "created_at": _iso(transaction.created_at),
            "paid_at": _iso(transaction.paid_at),
            "voided_at": _iso(transaction.voided_at),
            "refunded_at": _iso(transaction.refunded_at),
            "refund_reason": transaction.refund_reason,
        }

    @staticmethod
    def _item_to_raw(item: TransactionItem, transaction_id: str, created_at: datetime) -> dict:
        return {
            "id": item.id,
            "transaction_id": transaction_id,
            "product_id": item.product_id,
            "product_name": item.product_name,
            "quantity": item.quantity.value,
            "unit_price": str(item.unit_price.amount),
            "total_price": str(item.total_price.amount),
            "created_at": _iso(created_at),
        }

    @staticmethod
    def _to_domain(raw: dict, raw_items: list[dict]) -> Transaction:
        number = raw["transaction_number"]
        check = validate_transaction_number(number)
        if not check.ok:
            logger.warning("Transaction %s: %s (%s)", raw["id"], check.message, number)

        guest: GuestRef = WALK_IN
        if raw.get("guest_id") and raw["guest_id"] != WALK_IN_GUEST_ID:
            guest = IdentifiedGuest(guest_id=raw["guest_id"], guest_name=raw.get("guest_name", ""))

        items = [
            TransactionItem(
                product_id=i["product_id"],
                product_name=i.get("product_name", i["product_id"]),
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
                id=i["id"],
            )
            for i in raw_items
            if i["transaction_id"] == raw["id"]
        ]
        return Transaction(
            id=raw["id"],
            transaction_number=number,
            subtotal=Money(Decimal(raw["subtotal"])),
            discount=Money(Decimal(raw.get("discount", "0"))),
            tax=Money(Decimal(raw["tax"])),
            total=Money(Decimal(raw["total"])),
            payment_method=PaymentMethod(raw["payment_method"]),
            status=TransactionStatus(raw["status"]),
            guest=guest,
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
            paid_at=_from_iso(raw.get("paid_at")),
            voided_at=_from_iso(raw.get("voided_at")),
            refunded_at=_from_iso(raw.get("refunded_at")),
            refund_reason=raw.get("refund_reason"),
        )
