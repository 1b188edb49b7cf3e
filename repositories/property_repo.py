"""
repositories/property_repo.py
------------------------------
Data access layer for properties.
All SQL queries related to the `properties` table live here.
"""

from db.query_builder import SelectQuery
from models.property import PROPERTY_COLUMNS, Property, PropertySearch, to_cents
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_SEARCH_BASE = """
    SELECT properties.*, avg(property_reviews.rating) AS average_rating
    FROM properties
    LEFT JOIN property_reviews ON properties.id = property_reviews.property_id
"""


class PropertyRepository(BaseRepository):
    """Repository for searches and inserts on the properties table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Property) -> list[Property]:
        """
        Insert a new property.

        Returns:
            The inserted row(s), with database-assigned ids.
        """
        columns = ", ".join(PROPERTY_COLUMNS)
        placeholders = ", ".join(["%s"] * len(PROPERTY_COLUMNS))
        sql = f"INSERT INTO properties ({columns}) VALUES ({placeholders}) RETURNING *;"
        with self.database.cursor("add_property") as cur:
            cur.execute(sql, prop.insert_values())
            rows = cur.fetchall()
        stored = [Property.from_row(r) for r in rows]
        for p in stored:
            logger.info(f"Added property #{p.id} for owner {p.owner_id}")
        return stored

    # ── READ ──────────────────────────────────────────────

    def search(self, filters: PropertySearch, limit: int) -> list[Property]:
        """
        Fetch properties matching the supplied filters, cheapest first.

        Args:
            filters: Optional filters; unset fields are skipped.
            limit: Maximum number of results.

        Returns:
            List of Property objects with `average_rating` populated.
        """
        sql, params = self.build_search(filters, limit).render()
        logger.debug(f"Property search: {sql} params={params}")
        with self.database.cursor("get_all_properties") as cur:
            cur.execute(sql, params)
            return [Property.from_row(r) for r in cur.fetchall()]

    @staticmethod
    def build_search(filters: PropertySearch, limit: int) -> SelectQuery:
        """Translate search filters into a SelectQuery."""
        query = SelectQuery(_SEARCH_BASE)

        if filters.city:
            query.where("properties.city", "ILIKE", f"%{filters.city}%")

        if filters.owner_id is not None:
            query.where("properties.owner_id", "=", filters.owner_id)

        low = filters.minimum_price_per_night
        high = filters.maximum_price_per_night
        if low is not None and high is not None:
            query.where("properties.cost_per_night", "BETWEEN", (to_cents(low), to_cents(high)))
        elif low is not None:
            query.where("properties.cost_per_night", ">=", to_cents(low))
        elif high is not None:
            query.where("properties.cost_per_night", "<=", to_cents(high))

        query.group_by("properties.id")

        if filters.minimum_rating is not None:
            query.having("avg(property_reviews.rating)", ">=", filters.minimum_rating)

        return query.order_by("properties.cost_per_night").limit(limit)
