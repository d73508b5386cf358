"""
Noteful Backend: Database Handle and Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI session dependency.
How:   A `Database` object owns one engine (and its connection pool) plus a
       session factory. The application factory builds one per app and stores
       it on `app.state.database`; the lifespan handler disposes it on shutdown.
       Route dependencies check a session out per request.
Who:   Created by `create_app()`, the seed script and the test suite.
When:  Engine connects lazily on first use; sessions live for one request.

Connection Pooling:
    pool_size / max_overflow come from Settings for server databases.
    SQLite URLs (tests, local experiments) use SQLAlchemy's default pool,
    which does not accept sizing arguments.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteful.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic and
    `Database.create_all()` both read.
    """
    pass


def engine_options(settings: Settings) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine() derived from settings."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


class Database:
    """
    Persistence service handle: one engine plus its session factory.

    expire_on_commit=False keeps loaded attributes readable after commit;
    async sessions cannot lazy-load outside an awaited call.
    """

    def __init__(self, url: str, **options: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **options)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, **engine_options(settings))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Unit-of-work scope: commit on success, roll back on any error.

        The exception is re-raised after rollback so the global handlers
        can shape the HTTP response.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create every table registered on Base.metadata (idempotent)."""
        # Models must be imported so their tables exist on the metadata
        import noteful.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def drop_all(self) -> None:
        import noteful.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped")

    async def ping(self) -> bool:
        """Run SELECT 1; False when the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the Database handle stored on the application,
    so each app instance (production or test) talks to its own database.

    Teardown may run after the response has been sent, so the services
    commit their own writes; the commit on exit finds nothing pending.

    Example usage in a route:
        @router.get("/folders")
        async def list_folders(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
