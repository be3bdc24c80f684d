"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from hpos.domain.model.product import Product
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.product_repository import ProductRepository
from hpos.infrastructure.persistence.json_file import JsonFile

# Seeded into a fresh catalog so the counter is usable out of the box.
DEFAULT_PRODUCTS = [
    {"id": "svc_laundry", "name": "Laundry Service", "price": "150",
     "category_id": "services", "description": "Full laundry service per kg"},
    {"id": "svc_ironing", "name": "Ironing Service", "price": "75",
     "category_id": "services", "description": "Press and iron per item"},
    {"id": "svc_spa_massage", "name": "Spa Massage (1 hour)", "price": "1500",
     "category_id": "services", "description": "Relaxing full body massage"},
    {"id": "svc_airport_pickup", "name": "Airport Pickup", "price": "1200",
     "category_id": "services", "description": "One-way airport transfer"},
    {"id": "svc_late_checkout", "name": "Late Checkout", "price": "500",
     "category_id": "services", "description": "Extend checkout until 4PM"},
    {"id": "svc_minibar_restock", "name": "Minibar Restock", "price": "800",
     "category_id": "services", "description": "Full minibar package"},
    {"id": "food_club_sandwich", "name": "Club Sandwich", "price": "280",
     "category_id": "foods", "description": "Triple-decker with fries"},
    {"id": "food_iced_tea", "name": "Iced Tea", "price": "90",
     "category_id": "foods", "description": "House-brewed, bottomless"},
]


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, seed: bool = True) -> None:
        self._file = JsonFile(file_path)
        if seed and self._file.created:
            self._file.persist([dict(p, available=True) for p in DEFAULT_PRODUCTS])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return sorted(self._load().values(), key=lambda p: p.name.lower())

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {raw["id"]: self._to_domain(raw) for raw in self._file.load()}

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(str(raw["price"]))),
            available=raw.get("available", True),
            category_id=raw.get("category_id", ""),
            description=raw.get("description") or "",
        )
