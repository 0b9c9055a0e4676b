"""Fixtures for SQL integration tests against in-memory SQLite."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from gatehouse.config import DatabaseConfig
from gatehouse.infrastructure.persistence.database import (
    create_db_engine,
    create_schema,
    create_session_factory,
)


@pytest_asyncio.fixture
async def sqlite_engine():
    """Per-test engine on a fresh in-memory database with the schema applied."""
    engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(sqlite_engine: AsyncEngine) -> async_sessionmaker:
    return create_session_factory(sqlite_engine)


@pytest_asyncio.fixture
async def sqlite_session(session_factory: async_sessionmaker):
    """Per-test session, rolled back afterwards."""
    async with session_factory() as session:
        yield session
        await session.rollback()
