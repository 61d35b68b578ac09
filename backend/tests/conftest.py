"""
Scorekeeper Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:          fresh in-memory SQLite schema per test
    ├── session_factory:    async_sessionmaker bound to db_engine
    ├── db_session:         one AsyncSession for service/gateway tests
    ├── file_session_factory: file-backed SQLite, one connection per session
    ├── mock_db_session:    AsyncMock session for short-circuit assertions
    └── test_client:        HTTPX AsyncClient wired to the app, with the
                            session dependency pointed at db_engine
"""

import os

# Override settings for testing BEFORE any scorekeeper imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

import scorekeeper.models  # noqa: F401  (registers tables on Base.metadata)
from scorekeeper.database import Base, enable_sqlite_foreign_keys, get_db_session


async def _create_schema(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite with FK enforcement.

    StaticPool keeps the single in-memory connection alive for the whole
    test; every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    await _create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """
    File-backed SQLite where each session opens its own connection, for
    tests that interleave independent sessions.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'scores.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )
    enable_sqlite_foreign_keys(engine)
    await _create_schema(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def mock_db_session():
    """
    A mock async session. Used where a test must prove that no statement
    was sent at all.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden with the same commit/rollback contract,
    bound to the test database.
    """
    from scorekeeper.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
