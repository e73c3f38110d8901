"""
Pytest configuration and fixtures for the fishing competition tests
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.models import Participant


QUERY_METHODS = ["select", "eq", "is_", "gte", "order", "insert", "update", "upsert", "delete"]


def make_participant(id, name, place=None, weights=None, confirmed=True, **kwargs):
    """Participant shorthand used across the ranking tests"""
    return Participant(
        id=id,
        name=name,
        place=place,
        weights=list(weights or []),
        weighing_confirmed=confirmed,
        **kwargs,
    )


@pytest.fixture(scope="function")
def two_sector_participants():
    """Sectors [2, 2]; P3 and P4 tie on weight in sector B"""
    return [
        make_participant(1, "P1", place=1, weights=[100]),
        make_participant(2, "P2", place=2, weights=[50]),
        make_participant(3, "P3", place=3, weights=[80]),
        make_participant(4, "P4", place=4, weights=[80]),
    ]


@pytest.fixture(scope="function")
def competition_row():
    """saved_competitions row as returned by Supabase"""
    return {
        "id": "comp-1",
        "user_id": "user-1",
        "name": "W1",
        "date": "2024-05-12",
        "location": "Vijver De Hoek",
        "type": "individual-criterium",
        "criterium_folder_id": "folder-1",
        "sector_sizes": [2, 2],
        "participants": [
            {"id": 1, "name": "Jan", "klasse": "S", "place": 1, "weights": [500],
             "weighingConfirmed": True, "hasPaid": True, "totalWeight": 500, "points": 1},
            {"id": 2, "name": "Piet", "klasse": "V", "place": 2, "weights": [300],
             "weighingConfirmed": True, "hasPaid": False, "totalWeight": 300, "points": 2},
            {"id": 3, "name": "Joris", "klasse": "S", "place": 3, "weights": [800],
             "weighingConfirmed": True, "hasPaid": True, "totalWeight": 800, "points": 1},
            {"id": 4, "name": "Korneel", "klasse": "M", "place": 4, "weights": [100],
             "weighingConfirmed": True, "hasPaid": True, "totalWeight": 100, "points": 2},
        ],
        "created_at": "2024-05-12T18:00:00+00:00",
        "updated_at": None,
    }


@pytest.fixture(scope="function")
def folder_row():
    """criterium_folders row"""
    return {
        "id": "folder-1",
        "user_id": "user-1",
        "name": "Zomercriterium 2024",
        "type": "individual-criterium",
        "created_at": "2024-04-01T10:00:00+00:00",
    }


@pytest.fixture(scope="function")
def mock_query():
    """
    Chainable Supabase query builder

    Every builder method returns the same mock; set
    mock_query.execute.return_value / side_effect for the result.
    """
    query = MagicMock()
    for method in QUERY_METHODS:
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[])
    return query


@pytest.fixture(scope="function")
def mock_client(mock_query):
    """Supabase client whose table() always returns mock_query"""
    client = MagicMock()
    client.table.return_value = mock_query
    return client
