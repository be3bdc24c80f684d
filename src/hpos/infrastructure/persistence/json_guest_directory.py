"""Guest directory backed by a JSON export of the booking system."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from hpos.domain.model.guest import ActiveGuest, Booking
from hpos.domain.model.value_objects import Money
from hpos.domain.repository.guest_directory import GuestDirectory
from hpos.infrastructure.persistence.json_file import JsonFile


class JsonGuestDirectory(GuestDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- GuestDirectory interface ---------------------------------------------

    def list_active_guests(self) -> list[ActiveGuest]:
        guests = [ActiveGuest.from_booking(b) for b in self._bookings() if b.is_active]
        return sorted(guests, key=lambda g: g.guest_name.lower())

    def room_charge_for(self, guest_id: str) -> Money:
        total = Money.zero()
        for booking in self._bookings():
            if booking.guest_id == guest_id:
                total = total + booking.total_price
        return total

    def guest_name(self, guest_id: str) -> str | None:
        for booking in self._bookings():
            if booking.guest_id == guest_id:
                return booking.guest_name
        return None

    # --- Serialization --------------------------------------------------------

    def _bookings(self) -> list[Booking]:
        return [self._to_domain(raw) for raw in self._file.load()]

    @staticmethod
    def _to_domain(raw: dict) -> Booking:
        return Booking(
            id=raw["id"],
            guest_id=raw["guest_id"],
            guest_name=raw["guest_name"],
            room_id=str(raw.get("room_id", "")),
            room_type=raw.get("room_type", ""),
            status=raw.get("status") or "",
            total_price=Money(Decimal(str(raw.get("total_price", "0")))),
            guest_email=raw.get("guest_email", ""),
            guest_phone=raw.get("guest_phone", ""),
        )
