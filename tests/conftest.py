"""
Person API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (all function-scoped):
    ├── test_settings: Settings pointing at a fresh SQLite file in tmp_path
    ├── database:      Connected Database on that file
    ├── person_store:  SqlPersonStore over `database`
    ├── mock_store:    AsyncMock implementing the PersonStore interface
    └── test_client:   HTTPX AsyncClient wired to a fresh app instance
"""

import os
import tempfile
from unittest.mock import AsyncMock

# Point the module-level settings at throwaway locations before the package
# is imported anywhere
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="person_api_test_"), "persons.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from person_api.config import Settings
from person_api.database import Database
from person_api.services.person_store import SqlPersonStore
from person_api.services.store_base import PersonStore


@pytest.fixture
def test_settings(tmp_path):
    """Settings backed by a SQLite database unique to the test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'persons.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    db = Database(test_settings)
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def person_store(database):
    return SqlPersonStore(database)


@pytest.fixture
def mock_store():
    """
    A PersonStore double whose methods are AsyncMocks.

    Usage:
        mock_store.find_by_id.return_value = {"_id": ..., "name": ..., "age": ...}
        service = PersonService(mock_store)
    """
    return AsyncMock(spec=PersonStore)


@pytest_asyncio.fixture
async def test_client(test_settings):
    """
    Async HTTP client talking to a fresh app over ASGITransport.

    ASGITransport does not run the lifespan, so the database is connected
    and disconnected here.
    """
    from person_api.main import create_app

    app = create_app(test_settings)
    await app.state.database.connect()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.database.disconnect()
