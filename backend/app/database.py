"""
WorshipDeck Backend - Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns the engine and the session factory. The
       application lifespan opens exactly one, stores it on `app.state`,
       and disposes it on shutdown. Routes receive sessions through the
       `get_db_session` dependency, which reads the handle from the app.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Database is opened at startup; sessions are created per-request.

Architecture Decision:
    The storage handle is passed explicitly instead of living in a module
    global. Tests open their own `Database` on a temporary file and attach
    it to the app; nothing at import time touches the disk.

SQLite Notes:
    - aiosqlite runs each connection in a worker thread; the event loop
      never blocks on file I/O.
    - SQLite serializes writers at the file level. Two sessions that both
      write will queue behind each other (or fail with "database is locked"
      after the driver timeout).
"""

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

from app.config import settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so that `Base.metadata` (used by
    `Database.create_all` and by Alembic) knows every table.
    """
    pass


class Database:
    """
    Process-wide storage handle: one engine plus its session factory.

    Lifecycle:
        db = Database(url)        # no I/O yet
        await db.create_all()     # CREATE TABLE IF NOT EXISTS for every model
        async with db.session() as session: ...
        await db.dispose()        # close pooled connections
    """

    def __init__(self, url: str | None = None, echo: bool | None = None):
        self.url = url or settings.database_url
        self.engine: AsyncEngine = create_async_engine(
            self.url,
            pool_pre_ping=settings.db_pool_pre_ping,
            # SQL echo only when debugging; it is very noisy otherwise
            echo=settings.log_level == "DEBUG" if echo is None else echo,
        )
        # expire_on_commit=False: rows stay readable after the guard commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        """Create any missing tables. Existing tables and rows are untouched."""
        # Import registers the models on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Run `SELECT 1`; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Looks up the Database opened by the lifespan on `app.state`
        2. Yields a fresh session to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)

    Services that need a commit *inside* their own critical section (the
    song duplicate-name guard) commit explicitly; the commit here is then
    a no-op.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
