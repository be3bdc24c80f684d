"""Application service: apply or remove the cart's discount."""

from __future__ import annotations

from hpos.application.dto import CartDTO
from hpos.domain.exceptions import EntityNotFoundError
from hpos.domain.model.cart import Cart
from hpos.domain.model.discount import Discount
from hpos.domain.repository.discount_repository import DiscountRepository
from hpos.domain.service.discount_engine import DiscountEngine


class ApplyDiscountHandler:

    def __init__(self, discount_repo: DiscountRepository) -> None:
        self._discount_repo = discount_repo
        self._engine = DiscountEngine(discount_repo)

    def available(self) -> list[Discount]:
        return self._discount_repo.list_active()

    def apply_code(self, cart: Cart, code: str) -> CartDTO:
        self._engine.apply_code(cart, code).raise_for_failure()
        return CartDTO.from_cart(cart)

    def apply_selected(self, cart: Cart, discount_id: str) -> CartDTO:
        discount = self._discount_repo.get_by_id(discount_id)
        if discount is None or not discount.active:
            raise EntityNotFoundError(f"Discount with ID '{discount_id}' not found")
        self._engine.apply(cart, discount).raise_for_failure()
        return CartDTO.from_cart(cart)

    def remove(self, cart: Cart) -> CartDTO:
        self._engine.remove(cart)
        return CartDTO.from_cart(cart)
