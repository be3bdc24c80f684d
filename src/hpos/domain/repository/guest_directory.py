"""Abstract guest directory, backed by the booking system."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hpos.domain.model.guest import ActiveGuest
from hpos.domain.model.value_objects import Money


class GuestDirectory(ABC):

    @abstractmethod
    def list_active_guests(self) -> list[ActiveGuest]:
        """Return currently checked-in guests, sorted by name."""

    @abstractmethod
    def room_charge_for(self, guest_id: str) -> Money:
        """Return the guest's room-charge baseline (booking totals)."""

    @abstractmethod
    def guest_name(self, guest_id: str) -> str | None:
        """Return the guest's name from any booking, active or not."""

    def get_active_guest(self, guest_id: str) -> ActiveGuest | None:
        for guest in self.list_active_guests():
            if guest.guest_id == guest_id:
                return guest
        return None
