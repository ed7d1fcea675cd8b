"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.database import get_db_session
from notekeeper.core.rate_limiter import PinAttemptLimiter, get_rate_limiter
from notekeeper.models.note import Note
from notekeeper.services.note import NoteService


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def pin_limiter() -> PinAttemptLimiter:
    """Fresh limiter per test so failed logins never leak between tests."""
    return PinAttemptLimiter(max_attempts=5, window_seconds=3600)


@pytest.fixture
async def client(
    db_session: AsyncSession,
    pin_limiter: PinAttemptLimiter,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session and limiter overrides.

    The client uses the test database session, so notes created through
    the API are visible to db_session and are rolled back after the test.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from notekeeper.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_rate_limiter] = lambda: pin_limiter

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
async def clipboard(db_session: AsyncSession) -> Note:
    """The reserved clipboard note, created the way startup creates it."""
    return await NoteService(db_session).ensure_clipboard_note()


@pytest.fixture
def add_note(db_session: AsyncSession):
    """
    Insert a note directly into the database.

    updated_at defaults to a fixed past time so tests can observe
    that a write refreshed it.

    Usage:
        async def test_x(add_note):
            note = await add_note(title="Diary", hidden=1)
    """

    async def _add(**values: Any) -> Note:
        values.setdefault("title", "Groceries")
        values.setdefault("content", "milk")
        values.setdefault("created_at", datetime(2025, 1, 1, 9, 0, 0))
        values.setdefault("updated_at", datetime(2025, 1, 1, 9, 0, 0))
        note = Note(**values)
        db_session.add(note)
        await db_session.flush()
        return note

    return _add


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_code: Expected error code (optional)

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a request validation error (422).

        Args:
            response: httpx Response object
            field: Expected field with validation error (optional)

        Returns:
            Response JSON data
        """
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
