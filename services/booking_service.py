"""
services/booking_service.py
----------------------------
Query operations consumed by the web layer: users, reservations and
properties. Orchestrates input parsing and the repositories.

Not-found lookups return None (or an empty list); database failures raise
db.exceptions.QueryError for the caller to map to a response.
"""

from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import Property, PropertySearch
from models.reservation import Reservation
from models.user import User
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class BookingService:
    """
    Entry point for every read and insert the booking app performs.

    Args:
        database: Optional Database handle; the shared pool is used when omitted.
    """

    def __init__(self, database: Optional[Database] = None):
        self.user_repo = UserRepository(database)
        self.reservation_repo = ReservationRepository(database)
        self.property_repo = PropertyRepository(database)

    # ── USERS ─────────────────────────────────────────────

    def get_user_with_email(self, email: str) -> Optional[User]:
        """Get a single user given their email, or None."""
        return self.user_repo.get_by_email(email)

    def get_user_with_id(self, user_id: int) -> Optional[User]:
        """Get a single user given their id, or None."""
        return self.user_repo.get_by_id(user_id)

    def add_user(self, user: Union[User, Mapping[str, Any]]) -> User:
        """
        Add a new user.

        Args:
            user: A User, or a mapping with 'name', 'email' and 'password'.

        Returns:
            The stored User, including its new id.
        """
        if not isinstance(user, User):
            try:
                user = User(name=user["name"], email=user["email"], password=user["password"])
            except KeyError as e:
                raise ValueError(f"Missing user field: {e.args[0]}") from e
        return self.user_repo.add(user)

    # ── RESERVATIONS ──────────────────────────────────────

    def get_all_reservations(self, guest_id: int, limit: int = DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        """
        Get a guest's past reservations, oldest first.

        Returns:
            Every matching reservation up to `limit`; empty when there are none.
        """
        return self.reservation_repo.get_past_for_guest(guest_id, _check_limit(limit))

    # ── PROPERTIES ────────────────────────────────────────

    def get_all_properties(
        self,
        options: Union[PropertySearch, Mapping[str, Any], None] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """
        Search properties, cheapest first.

        Args:
            options: PropertySearch or a mapping with any of 'city', 'owner_id',
                'minimum_price_per_night', 'maximum_price_per_night' and
                'minimum_rating'. Prices are in currency units.
            limit: Maximum number of results.
        """
        filters = options if isinstance(options, PropertySearch) else PropertySearch.from_dict(options)
        return self.property_repo.search(filters, _check_limit(limit))

    def add_property(self, prop: Union[Property, Mapping[str, Any]]) -> list[Property]:
        """
        Add a property.

        Args:
            prop: A Property, or a mapping of its columns (`cost_per_night` in cents).

        Returns:
            The inserted row(s).
        """
        if not isinstance(prop, Property):
            prop = Property.from_dict(prop)
        return self.property_repo.add(prop)


def _check_limit(limit) -> int:
    """Reject anything that is not a positive integer."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    return limit
