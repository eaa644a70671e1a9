"""
Pytest configuration for swachh_identity integration tests.

Integration tests run against an in-memory SQLite database (aiosqlite).
StaticPool keeps the single connection alive so every session of a test
sees the same database.
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from swachh_identity.infrastructure.persistence.sqlalchemy import (
    create_session_maker,
    create_tables,
)


@pytest.fixture
async def async_engine():
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine):
    return create_session_maker(async_engine)


@pytest.fixture
async def db_session(session_maker):
    """Database session for a single test."""
    async with session_maker() as session:
        yield session
