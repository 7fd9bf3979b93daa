"""
Trazure Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    PostgreSQL (asyncpg): pool_size + max_overflow, pre-ping, hourly recycle.
    SQLite (aiosqlite):   NullPool. A file connection is opened per session,
                          so no pooled connection outlives its event loop.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from trazure.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options for the configured backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if database_url.startswith("sqlite"):
        options["poolclass"] = NullPool
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# expire_on_commit=False: rows stay readable after the repository commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for autogenerate.
    """
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)
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


async def dispose_engine() -> None:
    """Close all pooled connections. Called from the lifespan on shutdown."""
    await engine.dispose()
