"""Application service: pick the checked-in guest a cart is charged to."""

from __future__ import annotations

import logging

from hpos.application.dto import CartDTO
from hpos.domain.exceptions import StaleReferenceError
from hpos.domain.model.cart import Cart
from hpos.domain.repository.guest_directory import GuestDirectory

logger = logging.getLogger("hpos.cart")


class SelectGuestHandler:

    def __init__(self, guest_directory: GuestDirectory) -> None:
        self._guest_directory = guest_directory

    def handle(self, cart: Cart, guest_id: str) -> CartDTO:
        """Select *guest_id*; only currently checked-in guests qualify.

        Selecting a guest releases any applied discount.
        """
        guest = self._guest_directory.get_active_guest(guest_id)
        if guest is None:
            raise StaleReferenceError(
                f"Guest '{guest_id}' is not checked in and cannot have items added"
            )
        if cart.discount is not None:
            logger.info("Discount %s released: guest tabs are not discounted", cart.discount.code)
        cart.select_guest(guest)
        logger.info("Selected guest %s (room %s)", guest.guest_name, guest.room_id)
        return CartDTO.from_cart(cart)

    def clear(self, cart: Cart) -> CartDTO:
        cart.clear_guest()
        return CartDTO.from_cart(cart)
