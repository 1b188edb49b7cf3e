"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from models.user import User
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """Repository for reads and inserts on the users table."""

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by exact email match.

        Returns:
            The first matching User, or None.
        """
        sql = "SELECT * FROM users WHERE email = %s;"
        with self.database.cursor("get_user_with_email") as cur:
            cur.execute(sql, (email,))
            row = cur.fetchone()
        return User.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a user by primary key, or None."""
        sql = "SELECT * FROM users WHERE id = %s;"
        with self.database.cursor("get_user_with_id") as cur:
            cur.execute(sql, (user_id,))
            row = cur.fetchone()
        return User.from_row(row) if row else None

    def add(self, user: User) -> User:
        """
        Insert a new user.

        No format, strength or uniqueness checks are made here; the schema's
        constraints are the only guard.

        Returns:
            The stored User with its database-assigned id.
        """
        sql = """
            INSERT INTO users (name, email, password)
            VALUES (%s, %s, %s)
            RETURNING *;
        """
        with self.database.cursor("add_user") as cur:
            cur.execute(sql, (user.name, user.email, user.password))
            row = cur.fetchone()
        stored = User.from_row(row)
        logger.info(f"Added user #{stored.id}")
        return stored
