"""
SurfSpots Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   One place owns the connection pool; stores only ever see a session.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route dependencies, the CLI and Alembic.
When:  Engine is created at module import; sessions are created per-request.

Architecture Decision:
    Async SQLAlchemy with the asyncpg driver, so a slow search or a long
    bulk import does not block other requests on the event loop.

Connection Pooling:
    pool_size / max_overflow come from settings (defaults 20 + 10, so at most
    30 connections against PostgreSQL's default max_connections of 100).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.

Transactions:
    Request sessions commit once in get_db_session(). SqlSpotStore.create_spots
    commits itself so a multi-batch import is a single transaction.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from surfspots.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
# What: The async engine owns the connection pool and executes SQL
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    # Why conditional: SQL echo is only useful while developing
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# What: One AsyncSession per request or CLI command
# expire_on_commit=False: records returned by RETURNING stay readable after
#   commit; otherwise attribute access would try to reload outside the session
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a dependency:
        def get_spot_store(db: AsyncSession = Depends(get_db_session)) -> SpotStore:
            return SqlSpotStore(db)
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
async def dispose_engine() -> None:
    """Close all pooled connections. Called on application shutdown."""
    await engine.dispose()
