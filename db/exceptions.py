"""
db/exceptions.py
----------------
Typed failures raised by the data-access layer.
"No rows" is never an error: reads return None or an empty list instead.
"""

from typing import Optional


class DataAccessError(Exception):
    """Base class for every failure raised by this layer."""


class PoolNotInitializedError(DataAccessError):
    """A query was issued before init_pool() was called."""

    def __init__(self):
        super().__init__("Database pool not initialized. Call init_pool() first.")


class DatabaseUnavailableError(DataAccessError):
    """The connection pool could not be created."""


class QueryError(DataAccessError):
    """
    A statement failed at the driver level.

    Attributes:
        operation: Name of the repository operation that failed.
        pgcode: PostgreSQL SQLSTATE of the underlying error, when known.
    """

    def __init__(self, operation: str, message: str, pgcode: Optional[str] = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.pgcode = pgcode
