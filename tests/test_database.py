"""
Notes API — Database Lifecycle Tests
=====================================

What we test:
    ✅ Engine options follow the configured backend
    ✅ connect() creates the notes table
    ✅ Startup fails fast (and releases the engine) when the database is unreachable
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import Text, inspect
from sqlalchemy.pool import StaticPool

from notes_api.config import Settings
from notes_api.database import Database
from notes_api.main import create_app, lifespan
from notes_api.models.note import Note


class TestDatabaseFromSettings:

    @pytest.mark.asyncio
    async def test_sqlite_uses_static_pool(self):
        database = Database.from_settings(Settings(database_url="sqlite+aiosqlite://"))
        assert isinstance(database.engine.pool, StaticPool)
        await database.dispose()

    @pytest.mark.asyncio
    async def test_postgres_uses_configured_pool(self):
        settings = Settings(
            database_url="postgresql+asyncpg://u:p@localhost:5432/notes",
            db_pool_size=7,
        )
        database = Database.from_settings(settings)
        assert database.engine.pool.size() == 7
        await database.dispose()

    @pytest.mark.asyncio
    async def test_connect_creates_notes_table(self):
        database = Database.from_settings(Settings(database_url="sqlite+aiosqlite://"))
        await database.connect()

        async with database.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

        assert "notes" in tables
        await database.dispose()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_fails_fast_when_database_unreachable(self, monkeypatch):
        app = create_app(Settings(database_url="sqlite+aiosqlite://", log_level="WARNING"))
        monkeypatch.setattr(Database, "connect", AsyncMock(side_effect=OSError("connection refused")))
        dispose = AsyncMock()
        monkeypatch.setattr(Database, "dispose", dispose)

        with pytest.raises(OSError, match="connection refused"):
            async with lifespan(app):
                pass

        dispose.assert_awaited_once()
        assert not hasattr(app.state, "database")

    @pytest.mark.asyncio
    async def test_shutdown_disposes_engine(self, monkeypatch):
        app = create_app(Settings(database_url="sqlite+aiosqlite://", log_level="WARNING"))

        async with lifespan(app):
            database = app.state.database
            dispose = AsyncMock(wraps=database.dispose)
            monkeypatch.setattr(database, "dispose", dispose)

        dispose.assert_awaited_once()


class TestNoteTable:

    def test_color_has_no_length_limit(self):
        # PostgreSQL enforces VARCHAR lengths; color is free-form
        column = Note.__table__.c.color
        assert isinstance(column.type, Text)
        assert column.type.length is None
