"""
Notes Keeper — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── make_note:       Factory for transient Note ORM objects
    ├── app:             FastAPI app with its lifespan running on a fresh
    │                    in-memory SQLite database
    ├── test_client:     HTTPX AsyncClient bound to `app` through ASGITransport
    └── asgi_transport:  Raw ASGITransport for the notes_client tests
"""

import os

# Override settings BEFORE any notes_api import builds the settings singleton
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notes_api.config import Settings
from notes_api.main import create_app, lifespan
from notes_api.models.note import Note


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.update_note(mock_db_session, note.uuid, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_note():
    """Factory for transient Note rows with sensible defaults."""

    def _make(**overrides) -> Note:
        now = datetime.now(timezone.utc)
        fields = {
            "id": 1,
            "uuid": str(uuid.uuid4()),
            "text": "buy milk",
            "color": "",
            "nr_of_edits": 0,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Note(**fields)

    return _make


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite://", log_level="WARNING", api_prefix="/api")


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fully started application.

    ASGITransport does not send lifespan events, so the lifespan context is
    entered here: the database is connected and the notes table created.
    """
    application = create_app(test_settings)
    async with lifespan(application):
        yield application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def asgi_transport(app) -> ASGITransport:
    return ASGITransport(app=app)
