"""
Pytest fixtures for infrastructure persistence tests.

Each test gets a fresh in-memory SQLite database (aiosqlite) with all
tables created, and an isolated session on top of it.
"""

from uuid import UUID

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from recova.infrastructure.persistence.sqlalchemy.database import (
    create_tables,
    drop_tables,
)

# Fixed UUIDs for testing - ensures deterministic behavior
TEST_COMPANY_ID = UUID("12345678-1234-5678-1234-567812345678")
TEST_COMPANY_ID_2 = UUID("00000000-0000-0000-0000-000000000002")


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """
    Create an async engine on a private in-memory SQLite database.

    StaticPool keeps the single connection alive so every session sees
    the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_session(async_engine):
    """Create a fresh database session for each test."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        # Rollback any uncommitted changes
        await session.rollback()


@pytest_asyncio.fixture
async def dropped_tables(async_engine):
    """Remove the schema so queries fail at the database level."""
    await drop_tables(async_engine)
