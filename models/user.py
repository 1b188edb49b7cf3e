"""
models/user.py
--------------
Domain model for LightBnB users (guests and property owners).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class User:
    """
    Represents a registered user.

    Attributes:
        id: Database primary key (None for new records).
        name: Display name.
        email: Login email, used as a lookup key.
        password: Stored exactly as given; hashing happens upstream.
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        """Build a User from a dict-cursor row."""
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
        )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r})"
