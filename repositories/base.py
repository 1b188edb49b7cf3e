"""
repositories/base.py
--------------------
Shared plumbing for repositories: access to the injected Database handle.
"""

from typing import Optional

from db.connection import Database, get_database


class BaseRepository:
    """
    Base class for repositories.

    A Database can be injected (tests pass a fake one); otherwise the shared
    pool created by init_pool() is looked up on first use.
    """

    def __init__(self, database: Optional[Database] = None):
        self._database = database

    @property
    def database(self) -> Database:
        if self._database is None:
            self._database = get_database()
        return self._database
