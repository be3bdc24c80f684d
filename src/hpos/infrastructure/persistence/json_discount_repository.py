"""JSON-file-backed implementation of DiscountRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from hpos.domain.model.discount import Discount, DiscountKind
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.discount_repository import DiscountRepository
from hpos.infrastructure.persistence.json_file import JsonFile

DEFAULT_DISCOUNTS = [
    {"id": "1", "code": "WELCOME10", "kind": "percentage", "value": "10",
     "description": "Welcome discount - 10% off", "min_subtotal": "500", "active": True},
    {"id": "2", "code": "SPA20", "kind": "percentage", "value": "20",
     "description": "Spa services - 20% off", "min_subtotal": "1000", "active": True},
    {"id": "3", "code": "FIXED100", "kind": "fixed", "value": "100",
     "description": "Fixed ₱100 discount", "min_subtotal": "800", "active": True},
]


class JsonDiscountRepository(DiscountRepository):

    def __init__(self, file_path: Path, seed: bool = True) -> None:
        self._file = JsonFile(file_path)
        if seed and self._file.created:
            self._file.persist(DEFAULT_DISCOUNTS)

    # --- DiscountRepository interface -----------------------------------------

    def get_by_id(self, discount_id: str) -> Discount | None:
        for raw in self._file.load():
            if raw["id"] == discount_id:
                return self._to_domain(raw)
        return None

    def list_active(self) -> list[Discount]:
        return [d for d in map(self._to_domain, self._file.load()) if d.active]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Discount:
        min_subtotal = raw.get("min_subtotal")
        return Discount(
            id=raw["id"],
            code=raw["code"],
            kind=DiscountKind(raw["kind"]),
            value=Decimal(str(raw["value"])),
            description=raw.get("description", ""),
            min_subtotal=Money(Decimal(str(min_subtotal))) if min_subtotal else None,
            active=raw.get("active", True),
        )
