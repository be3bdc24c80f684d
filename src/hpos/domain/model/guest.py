"""Guest references and the booking-derived guest directory entries.

A sale is either tied to an identified, checked-in guest or it is a
walk-in.  ``GuestRef`` makes that explicit instead of a magic guest id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from hpos.domain.model.value_objects import Money

# Booking statuses that mean the guest can no longer be charged.
INACTIVE_BOOKING_STATUSES = frozenset({"checked_out", "paid", "cancelled"})


@dataclass(frozen=True)
class IdentifiedGuest:
    guest_id: str
    guest_name: str


@dataclass(frozen=True)
class WalkIn:
    guest_name: str = "Walk-in"

    @property
    def guest_id(self) -> None:
        return None


WALK_IN = WalkIn()

GuestRef = Union[IdentifiedGuest, WalkIn]


@dataclass(frozen=True)
class Booking:
    """A room booking as supplied by the booking system."""

    id: str
    guest_id: str
    guest_name: str
    room_id: str
    room_type: str = ""
    status: str = "confirmed"
    total_price: Money = Money.zero()
    guest_email: str = ""
    guest_phone: str = ""

    @property
    def is_active(self) -> bool:
        """A booking is active unless checked out, paid or cancelled."""
        return (self.status or "").lower() not in INACTIVE_BOOKING_STATUSES


@dataclass(frozen=True)
class ActiveGuest:
    """A currently checked-in guest, selectable for room-tab charges."""

    guest_id: str
    guest_name: str
    room_id: str
    room_type: str
    booking_id: str

    @classmethod
    def from_booking(cls, booking: Booking) -> ActiveGuest:
        return cls(
            guest_id=booking.guest_id,
            guest_name=booking.guest_name,
            room_id=booking.room_id,
            room_type=booking.room_type,
            booking_id=booking.id,
        )

    def ref(self) -> IdentifiedGuest:
        return IdentifiedGuest(guest_id=self.guest_id, guest_name=self.guest_name)


@dataclass(frozen=True)
class Guest:
    first_name: str
    last_name: str


@dataclass(frozen=True)
class Room:
    room_number: str
