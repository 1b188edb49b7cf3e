"""Shared test fixtures for the data-access test suite."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from db.connection import Database


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_cursor():
    """Mock dict cursor that tracks executed SQL."""
    cursor = MagicMock()
    cursor.fetchone.return_value = None
    cursor.fetchall.return_value = []
    return cursor


@pytest.fixture
def mock_conn(mock_cursor):
    """Mock connection whose cursor() context yields mock_cursor."""
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = mock_cursor
    conn.cursor.return_value.__exit__.return_value = False
    return conn


@pytest.fixture
def mock_pool(mock_conn):
    """Mock connection pool handing out mock_conn."""
    conn_pool = MagicMock()
    conn_pool.getconn.return_value = mock_conn
    return conn_pool


@pytest.fixture
def database(mock_pool):
    """A real Database handle over the mock pool."""
    return Database(mock_pool)


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------

def make_user_row(**overrides):
    row = {
        "id": 1,
        "name": "Devin Sanders",
        "email": "tristanjacobs@gmail.com",
        "password": "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u.",
    }
    row.update(overrides)
    return row


def make_property_row(**overrides):
    row = {
        "id": 1,
        "owner_id": 1,
        "title": "Speed lamp",
        "description": "description",
        "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?h=350",
        "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
        "cost_per_night": 93061,
        "street": "536 Namsub Highway",
        "city": "Sotboske",
        "province": "Quebec",
        "post_code": "28142",
        "country": "Canada",
        "parking_spaces": 6,
        "number_of_bathrooms": 4,
        "number_of_bedrooms": 8,
    }
    row.update(overrides)
    return row


def make_reservation_row(**overrides):
    row = make_property_row()
    row.update({
        "reservation_id": 1,
        "guest_id": 1,
        "property_id": row["id"],
        "start_date": date(2018, 9, 11),
        "end_date": date(2018, 9, 26),
        "average_rating": 4.25,
    })
    row.update(overrides)
    return row
