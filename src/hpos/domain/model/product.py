"""Product catalog entry.

Products belong to the externally managed catalog.  The point-of-sale
core only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass

from hpos.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A sellable food item or service in the catalog."""

    id: str
    name: str
    price: Money
    available: bool = True
    category_id: str = ""
    description: str = ""
