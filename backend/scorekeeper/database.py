"""
Scorekeeper Backend — Database Session Management
===================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates one async engine (connection pool) per process, provides a
       session dependency that auto-commits on success and auto-rolls-back
       on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    SQLite URLs (local runs, tests) skip pool sizing and turn on
    PRAGMA foreign_keys so the rooms → players cascades are enforced.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from scorekeeper.config import settings


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if settings.is_sqlite:
        options["connect_args"] = {"timeout": 30}
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ships with FK checks disabled; without this the ON DELETE
    CASCADE clauses on rooms and players are silently ignored.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine Configuration ──────────────────────────────────────────────────
# One engine per process; every request borrows a connection from its pool.
engine = create_async_engine(settings.database_url, **_engine_options())

if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, when the
# response models are built from ORM objects.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the services perform queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Raises:
        Any exception from the handler is propagated to the global error
        handlers after the rollback.
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
    """Closes all pooled connections. Called from the lifespan shutdown."""
    await engine.dispose()
