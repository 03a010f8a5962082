"""
Notes API — Database Lifecycle & Session Management
====================================================

What:  Async SQLAlchemy engine wrapper, declarative base, and the FastAPI
       session dependency.
Why:   The engine (connection pool) is the only process-wide resource. It is
       created by the application lifespan, stored on `app.state`, and handed
       to route handlers through `Depends(get_db_session)` — never imported as
       a module-level global.
How:   `Database.from_settings()` builds the engine; `connect()` verifies the
       connection and creates the `notes` table; `dispose()` closes the pool.
When:  `connect()` once before serving, `dispose()` on shutdown, one session
       per request in between.

Connection Pooling:
    PostgreSQL: pool_size / max_overflow / pre_ping from settings,
                connections recycled hourly.
    SQLite:     a single shared connection (StaticPool) so an in-memory
                database survives across sessions.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from notes_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


class Database:
    """
    Owns the async engine and the session factory.

    One instance per running application. Handlers never touch the engine
    directly; they receive an AsyncSession from `get_db_session`.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: attributes stay readable after commit,
        # so services can build responses without another round-trip
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create the engine with pool options suited to the configured backend."""
        if settings.is_sqlite:
            engine = create_async_engine(
                settings.database_url,
                # One shared connection: each new connection to ":memory:"
                # would otherwise open an empty database
                poolclass=StaticPool,
                echo=settings.log_level == "DEBUG",
            )
        else:
            engine = create_async_engine(
                settings.database_url,
                pool_size=settings.db_pool_size,          # Persistent connections
                max_overflow=settings.db_max_overflow,     # Extra connections for bursts
                pool_pre_ping=settings.db_pool_pre_ping,  # Validate a connection before use
                pool_recycle=3600,                         # Drop connections older than an hour
                # SQL echo is noisy; only in DEBUG
                echo=settings.log_level == "DEBUG",
            )
        return cls(engine)

    async def connect(self) -> None:
        """
        Verify connectivity and create the notes table if it does not exist.

        Raises whatever the driver raises; the lifespan treats any failure
        here as fatal.
        """
        # Import registers the model with Base.metadata
        from notes_api.models.note import Note  # noqa: F401

        # One transaction: the probe and the DDL either both succeed or startup fails
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Connected to database (%s)", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Services commit their own writes so that the response is only built from
    durable state. On any exception the session is rolled back before the
    error propagates to the global handlers.

    Example usage in a route:
        @router.get("/list")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
