"""Abstract repository for Discount reference data."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hpos.domain.model.discount import Discount


class DiscountRepository(ABC):

    @abstractmethod
    def get_by_id(self, discount_id: str) -> Discount | None:
        """Return a discount by its ID, or None."""

    @abstractmethod
    def list_active(self) -> list[Discount]:
        """Return every active discount."""

    def find_active_by_code(self, code: str) -> Discount | None:
        """Case-insensitive lookup among active discounts."""
        for discount in self.list_active():
            if discount.matches_code(code):
                return discount
        return None
