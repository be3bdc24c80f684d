"""Application service: cart editing (add, change quantity, remove, clear)."""

from __future__ import annotations

import logging

from hpos.application.dto import CartDTO
from hpos.domain.exceptions import EntityNotFoundError
from hpos.domain.model.cart import Cart
from hpos.domain.repository.product_repository import ProductRepository

logger = logging.getLogger("hpos.cart")


class EditCartHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def add(self, cart: Cart, product_id: str) -> CartDTO:
        """Add one unit of a catalog product to the cart."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        cart.add_line(product).raise_for_failure()
        logger.debug("Added %s to cart", product.name)
        return CartDTO.from_cart(cart)

    def change_quantity(self, cart: Cart, product_id: str, delta: int) -> CartDTO:
        cart.change_quantity(product_id, delta).raise_for_failure()
        return CartDTO.from_cart(cart)

    def remove(self, cart: Cart, product_id: str) -> CartDTO:
        cart.remove_line(product_id)
        return CartDTO.from_cart(cart)

    def clear(self, cart: Cart) -> CartDTO:
        cart.clear()
        return CartDTO.from_cart(cart)
