"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so concurrent callers on different
threads can share it. The pool is created once by init_pool() and disposed
by close_pool(); repositories receive it as a `Database` handle.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import extras, pool

from config import DB_POOL_MAX, DB_POOL_MIN, DatabaseConfig
from db.exceptions import DatabaseUnavailableError, PoolNotInitializedError, QueryError
from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """Handle over a connection pool that runs one statement per checkout."""

    def __init__(self, conn_pool: pool.AbstractConnectionPool):
        self._pool = conn_pool

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Check a connection out of the pool for the duration of the block.

        The connection is always returned to the pool, on success or failure.

        Raises:
            DatabaseUnavailableError: If the pool is exhausted or closed.
        """
        try:
            conn = self._pool.getconn()
        except pool.PoolError as e:
            logger.error(f"Could not get a connection from the pool: {e}")
            raise DatabaseUnavailableError(str(e)) from e
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    @contextmanager
    def cursor(self, operation: str) -> Iterator[extras.RealDictCursor]:
        """
        Yield a dict cursor inside a single-statement transaction.

        Commits when the block exits cleanly and rolls back otherwise.

        Args:
            operation: Name used in log lines and in the raised QueryError.

        Raises:
            QueryError: If the driver reports an error.
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    yield cur
                conn.commit()
            except psycopg2.Error as e:
                logger.error(f"{operation} failed: {e}")
                self._rollback(conn, operation)
                raise QueryError(operation, str(e).strip(), getattr(e, "pgcode", None)) from e
            except Exception:
                self._rollback(conn, operation)
                raise

    @staticmethod
    def _rollback(conn, operation: str) -> None:
        """Roll back, tolerating a connection the server already dropped."""
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"{operation}: rollback failed: {e}")

    def close(self) -> None:
        """Close every connection held by the pool."""
        self._pool.closeall()


_database: Optional[Database] = None
_init_lock = threading.Lock()


def init_pool(
    config: Optional[DatabaseConfig] = None,
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
) -> Database:
    """
    Initialize the shared database connection pool.

    Calling it again while a pool is open returns the existing handle.

    Args:
        config: Connection settings; read from the environment when omitted.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Returns:
        The shared Database handle.

    Raises:
        DatabaseUnavailableError: If the database is unreachable.
    """
    global _database
    with _init_lock:
        if _database is not None:
            return _database
        config = config or DatabaseConfig.from_env()
        try:
            conn_pool = pool.ThreadedConnectionPool(
                min_conn,
                max_conn,
                host=config.host,
                port=config.port,
                user=config.user,
                password=config.password,
                dbname=config.database,
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise DatabaseUnavailableError(str(e).strip()) from e
        _database = Database(conn_pool)
        logger.info(f"Database connection pool initialized for {config.host}:{config.port}/{config.database}.")
        return _database


def get_database() -> Database:
    """
    Get the shared Database handle.

    Raises:
        PoolNotInitializedError: If init_pool() has not been called.
    """
    if _database is None:
        raise PoolNotInitializedError()
    return _database


def close_pool() -> None:
    """Close all connections in the pool."""
    global _database
    with _init_lock:
        if _database is not None:
            _database.close()
            _database = None
            logger.info("Database connection pool closed.")
