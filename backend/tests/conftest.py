"""
NotesApp Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Unit tests use a mocked Database whose session() yields an AsyncMock
       session. Integration and API tests use a real SQLite file database
       (aiosqlite) per test, created with the same schema step as startup.

Fixture Hierarchy:
    ├── mock_session / mock_database: no real DB needed
    ├── test_settings: Settings pointing at a per-test SQLite file
    ├── database: real Database with the schema created
    └── test_client: HTTPX AsyncClient wired to a fresh app
"""

import os

# Override settings for testing BEFORE any notesapp imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum; keeps hashing fast
os.environ["AUTO_MIGRATE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notesapp.config import Settings
from notesapp.database import Database
from notesapp.main import create_app


# ══════════════════════════════════════════════════════════════════════════
# Mocked Store (unit tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_session():
    """
    A mock AsyncSession.

    Usage:
        mock_session.get.return_value = None
        with pytest.raises(NoteNotFoundError):
            await NoteService(mock_database).get_note(1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_database(mock_session):
    """A Database stand-in whose session() yields mock_session."""
    database = MagicMock(spec=Database)

    @asynccontextmanager
    async def session():
        yield mock_session

    database.session = session
    return database


@pytest.fixture
def broken_database():
    """
    Factory for a Database stand-in whose session() fails before yielding.

    Usage:
        database = broken_database(OperationalError("SELECT 1", {}, Exception("gone")))
    """
    def factory(error: Exception):
        database = MagicMock(spec=Database)

        @asynccontextmanager
        async def session():
            raise error
            yield  # pragma: no cover

        database.session = session
        return database

    return factory


@pytest.fixture
def sample_note_data():
    return {
        "id": 1,
        "title": "Groceries",
        "content": "Milk, eggs, bread",
        "created_at": datetime.now(timezone.utc),
    }


# ══════════════════════════════════════════════════════════════════════════
# Real Store (integration and API tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated SQLite file inside pytest's tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        bcrypt_rounds=4,
        auto_migrate=False,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A real Database with the users and notes tables created."""
    db = Database(test_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_app(test_settings, database):
    return create_app(settings=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed directly to the ASGI app (no server).

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.text == "Hello"
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
