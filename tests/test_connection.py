"""Tests for db/connection.py - pool lifecycle and cursor handling."""

import threading
import time
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2 import extras, pool

from config import DatabaseConfig
from db import connection
from db.exceptions import DatabaseUnavailableError, PoolNotInitializedError, QueryError


@pytest.fixture(autouse=True)
def no_shared_pool(monkeypatch):
    monkeypatch.setattr(connection, "_database", None)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

class TestDatabaseCursor:
    """Tests for Database.cursor()."""

    def test_yields_dict_cursor_and_commits(self, database, mock_conn, mock_cursor, mock_pool):
        with database.cursor("op") as cur:
            assert cur is mock_cursor
        mock_conn.cursor.assert_called_once_with(cursor_factory=extras.RealDictCursor)
        mock_conn.commit.assert_called_once()
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_driver_error_becomes_query_error(self, database, mock_conn, mock_cursor, mock_pool):
        mock_cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection")

        with pytest.raises(QueryError, match="get_user_with_id failed") as excinfo:
            with database.cursor("get_user_with_id") as cur:
                cur.execute("SELECT 1")

        assert excinfo.value.operation == "get_user_with_id"
        assert isinstance(excinfo.value.__cause__, psycopg2.OperationalError)
        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_dropped_connection_still_raises_query_error(self, database, mock_conn, mock_cursor, mock_pool):
        mock_cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection unexpectedly")
        mock_conn.rollback.side_effect = psycopg2.InterfaceError("connection already closed")

        with pytest.raises(QueryError, match="server closed the connection") as excinfo:
            with database.cursor("get_user_with_id") as cur:
                cur.execute("SELECT 1")

        assert isinstance(excinfo.value.__cause__, psycopg2.OperationalError)
        mock_conn.rollback.assert_called_once()
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_failed_rollback_keeps_original_error(self, database, mock_conn, mock_pool):
        mock_conn.rollback.side_effect = psycopg2.InterfaceError("connection already closed")
        with pytest.raises(KeyError):
            with database.cursor("op"):
                raise KeyError("id")
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_other_errors_roll_back_and_propagate(self, database, mock_conn, mock_pool):
        with pytest.raises(KeyError):
            with database.cursor("op"):
                raise KeyError("id")
        mock_conn.rollback.assert_called_once()
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_exhausted_pool(self, database, mock_pool):
        mock_pool.getconn.side_effect = pool.PoolError("connection pool exhausted")
        with pytest.raises(DatabaseUnavailableError):
            with database.connection():
                pass
        mock_pool.putconn.assert_not_called()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestPoolLifecycle:
    """Tests for init_pool(), get_database() and close_pool()."""

    def test_get_database_before_init(self):
        with pytest.raises(PoolNotInitializedError):
            connection.get_database()

    @patch("db.connection.pool.ThreadedConnectionPool")
    def test_init_pool_uses_config(self, mock_pool_cls):
        cfg = DatabaseConfig("db", 5433, "vagrant", "123", "lightbnb")
        db = connection.init_pool(cfg, min_conn=2, max_conn=4)

        mock_pool_cls.assert_called_once_with(
            2, 4, host="db", port=5433, user="vagrant", password="123", dbname="lightbnb",
        )
        assert connection.get_database() is db

    @patch("db.connection.pool.ThreadedConnectionPool")
    def test_init_pool_is_idempotent(self, mock_pool_cls):
        first = connection.init_pool(DatabaseConfig())
        second = connection.init_pool(DatabaseConfig())
        assert first is second
        mock_pool_cls.assert_called_once()

    @patch("db.connection.pool.ThreadedConnectionPool")
    def test_concurrent_init_builds_one_pool(self, mock_pool_cls):
        def slow_pool(*args, **kwargs):
            time.sleep(0.05)
            return MagicMock()

        mock_pool_cls.side_effect = slow_pool
        handles = []
        threads = [
            threading.Thread(target=lambda: handles.append(connection.init_pool(DatabaseConfig())))
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        mock_pool_cls.assert_called_once()
        assert len(handles) == 4
        assert all(h is handles[0] for h in handles)

    @patch("db.connection.pool.ThreadedConnectionPool")
    def test_init_pool_unreachable(self, mock_pool_cls):
        mock_pool_cls.side_effect = psycopg2.OperationalError("could not connect to server")
        with pytest.raises(DatabaseUnavailableError, match="could not connect"):
            connection.init_pool(DatabaseConfig())
        with pytest.raises(PoolNotInitializedError):
            connection.get_database()

    @patch("db.connection.pool.ThreadedConnectionPool")
    def test_close_pool(self, mock_pool_cls):
        connection.init_pool(DatabaseConfig())
        connection.close_pool()

        mock_pool_cls.return_value.closeall.assert_called_once()
        with pytest.raises(PoolNotInitializedError):
            connection.get_database()

    def test_close_pool_without_init(self):
        connection.close_pool()
