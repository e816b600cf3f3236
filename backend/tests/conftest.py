"""
WorshipDeck Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for storage-failure paths
    ├── database: real Database on a fresh SQLite file under tmp_path
    ├── db_session: one AsyncSession on that database
    ├── test_client: HTTPX AsyncClient wired to an app using that database
    └── sample_song_payload: a complete POST /songs body
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any app import so nothing points at ./sqlite.db
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="worshipdeck_test_"), "unused.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.database import Database


@pytest.fixture
def mock_db_session():
    """
    A mock async database session (no real DB).

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on its own SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    ASGITransport does not run the lifespan, so the test database is
    attached to app.state directly (what the lifespan would have done).
    """
    from app.main import create_app

    app = create_app()
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_song_payload():
    return {
        "song_name": "Amazing Grace",
        "main_stanza": {"label": "Chorus", "lines": ["Amazing grace, how sweet the sound"]},
        "stanzas": [
            {"label": "Verse 1", "lines": ["That saved a wretch like me"]},
            {"label": "Verse 2", "lines": ["'Twas grace that taught my heart to fear"]},
        ],
    }
