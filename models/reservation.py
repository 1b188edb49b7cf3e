"""
models/reservation.py
---------------------
Domain model for reservations.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from models.property import Property


@dataclass
class Reservation:
    """
    A guest's stay at a property.

    Attributes:
        id: Database primary key.
        guest_id: User id of the guest.
        property_id: Reserved property.
        start_date: First night.
        end_date: Checkout date.
        listing: The reserved property with its average rating, when loaded.
    """
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    id: Optional[int] = None
    listing: Optional[Property] = None

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Reservation":
        """
        Build a Reservation from a joined reservation/property row.

        The row carries the reservation id as `reservation_id` and the
        property columns under their own names.
        """
        return cls(
            id=row["reservation_id"],
            guest_id=row["guest_id"],
            property_id=row["property_id"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            listing=Property.from_row({**row, "id": row["property_id"]}),
        )
