"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database. Every test gets a fresh
    engine and schema, so no test can see another test's notes.
"""

from collections.abc import AsyncGenerator, Generator
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

import notekeeper.models.note  # noqa: F401  registers the notes table
from notekeeper.models.base import Base

TEST_PIN = "4321"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Engine Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create the test database engine.

    SQLite in-memory needs a StaticPool so every session shares the
    one connection that holds the database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# =============================================================================
# Database Session Fixtures
# =============================================================================


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Changes are rolled back after the test.

    Usage:
        async def test_create_note(db_session: AsyncSession):
            note = Note(title="Groceries")
            db_session.add(note)
            await db_session.flush()
            assert note.id is not None
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Secrets Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> SimpleNamespace:
    """Secrets used in place of config/.env during tests."""
    return SimpleNamespace(hidden_notes_pin=TEST_PIN, database_path=None)


@pytest.fixture(autouse=True)
def _stub_pin_secret(test_settings: SimpleNamespace) -> Generator[None, None, None]:
    """
    Stub the secret boundary used by PIN checks.

    Only the security module's lookup is replaced; config loading
    itself is left alone so its own tests can exercise it.
    """
    with patch("notekeeper.core.security.get_settings", return_value=test_settings):
        yield


@pytest.fixture
def pin_headers() -> dict[str, str]:
    """Headers carrying the valid PIN credential."""
    return {"X-Auth-Pin": TEST_PIN}


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"


@pytest.fixture
def valid_pin() -> str:
    """The PIN the stubbed secret accepts."""
    return TEST_PIN
