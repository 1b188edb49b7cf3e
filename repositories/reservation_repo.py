"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
"""

from models.reservation import Reservation
from repositories.base import BaseRepository


class ReservationRepository(BaseRepository):
    """Repository for reads on the reservations table."""

    def get_past_for_guest(self, guest_id: int, limit: int) -> list[Reservation]:
        """
        Fetch a guest's finished reservations with the reserved properties.

        Args:
            guest_id: User id of the guest.
            limit: Maximum number of reservations.

        Returns:
            Reservations ordered by start date, oldest first.
        """
        sql = """
            SELECT properties.*,
                   reservations.id AS reservation_id,
                   reservations.guest_id,
                   reservations.property_id,
                   reservations.start_date,
                   reservations.end_date,
                   avg(property_reviews.rating) AS average_rating
            FROM reservations
            JOIN properties ON reservations.property_id = properties.id
            LEFT JOIN property_reviews ON properties.id = property_reviews.property_id
            WHERE reservations.guest_id = %s
              AND reservations.end_date < now()::date
            GROUP BY properties.id, reservations.id
            ORDER BY reservations.start_date
            LIMIT %s;
        """
        with self.database.cursor("get_all_reservations") as cur:
            cur.execute(sql, (guest_id, limit))
            return [Reservation.from_row(r) for r in cur.fetchall()]
