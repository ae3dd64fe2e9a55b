"""
Bookmarks API - Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, FastAPI session dependency
       and store lifecycle helpers.
How:   Creates an async engine from settings and provides a session
       dependency that commits on success and rolls back on error.
Who:   Route handlers (via Depends), the app lifespan, Alembic and tests.
When:  Engine is created at module import; sessions are created per request.

Connection Pooling:
    PostgreSQL: pool_size + max_overflow connections, pre-ping, hourly recycle.
    SQLite:     NullPool. Each session opens its own connection, so a
                connection is never shared between event loops in tests.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from bookmarks_api.config import settings


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        options["poolclass"] = NullPool
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: ORM objects stay readable after the commit that
# happens when the request dependency exits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic and `init_models()` read.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (services only flush)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    A request's writes therefore apply completely or not at all.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    Create every table known to Base.metadata (no-op for existing tables).

    Used by the test suite and for local SQLite development; PostgreSQL
    deployments run `alembic upgrade head` instead.
    """
    # Registers User and Bookmark with Base.metadata
    from bookmarks_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_models() -> None:
    """Drop every table known to Base.metadata."""
    from bookmarks_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def reset_database() -> None:
    """
    Remove all bookmarks and users in a single transaction.

    Bookmarks go first so the user foreign key is never violated, even on
    backends that do not enforce ON DELETE CASCADE (SQLite without the
    foreign_keys pragma).
    """
    from bookmarks_api.models import Bookmark, User

    async with async_session_factory() as session:
        async with session.begin():
            await session.execute(delete(Bookmark))
            await session.execute(delete(User))


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown and test-suite teardown.
    """
    await engine.dispose()
