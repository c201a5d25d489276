# tests/conftest.py

import pytest
import requests
from unittest.mock import MagicMock

from athan import create_app, db as _db


@pytest.fixture(scope='session')
def app():
    """Session-wide application for testing."""
    app = create_app('testing')
    return app


@pytest.fixture(scope='function')
def db(app):
    """Function-level database setup. Creates and tears down tables for each test function."""
    with app.app_context():
        _db.create_all()

        yield _db

        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def test_client(app, db):
    """A test client for the app, ensuring the DB is initialized."""
    return app.test_client()


@pytest.fixture(autouse=True)
def mock_redis(mocker):
    """
    Replaces the Redis hot tier with an empty in-memory mock.
    This applies to all tests automatically.
    """
    mock_client = MagicMock()
    mock_client.get.return_value = None
    mocker.patch('athan.services.prayer_time.cache_layer.redis_client', mock_client)
    return mock_client


@pytest.fixture(autouse=True)
def block_remote_api(mocker):
    """No test talks to the real AlAdhan API; unpatched fetches fail like an offline network."""
    return mocker.patch(
        'athan.services.api_adapters.aladhan_adapter.requests.get',
        side_effect=requests.exceptions.ConnectionError("network disabled in tests"),
    )


def make_month_times(days=31, values=None):
    """{day: six "HH:MM" strings} as returned by the adapter."""
    values = values or ["05:00", "06:30", "12:30", "15:45", "18:20", "19:50"]
    return {day: list(values) for day in range(1, days + 1)}
