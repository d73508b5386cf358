"""
Noteful Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Endpoint tests run the real app against a throwaway SQLite file
       (aiosqlite) seeded with noteful.seed data; service tests use a mocked
       AsyncSession to drive error paths a real database rarely produces.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session (no database)
    ├── database:        seeded SQLite Database handle in tmp_path
    ├── db_session:      a session on that database for direct assertions
    └── test_client:     HTTPX AsyncClient bound to an app using `database`
"""

import os
import tempfile
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Keep the module-level app (noteful.main) off any real database
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='noteful_test_')}/import.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noteful.config import Settings
from noteful.database import Database
from noteful.seed import seed_database


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_folder(mock_db_session):
            mock_db_session.get.return_value = folder
            result = await FolderService(mock_db_session).get(folder_id)
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A freshly seeded SQLite database, disposed after the test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}")
    await seed_database(db)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """Session for reading the database directly alongside API calls."""
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(database) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to an app instance wired to `database`.

    ASGITransport does not run the lifespan, so the fixture owns the
    database lifecycle instead.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/folders")
            assert response.status_code == 200
    """
    from noteful.main import create_app

    app = create_app(
        Settings(database_url=database.url, log_level="WARNING"),
        database=database,
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
