"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from notekeeper.models.note import Note


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session, update_may_unhide=True)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.get = AsyncMock()
    return session


# =============================================================================
# Model Factories
# =============================================================================


@pytest.fixture
def make_note():
    """
    Build detached Note instances for mocked repositories.

    Usage:
        def test_hidden(make_note):
            note = make_note(id=3, hidden=1)
    """

    def _make(**overrides: Any) -> Note:
        values: dict[str, Any] = {
            "id": 1,
            "title": "Groceries",
            "content": "milk",
            "pinned": 0,
            "hidden": 0,
            "created_at": datetime(2025, 8, 1, 10, 0, 0),
            "updated_at": datetime(2025, 8, 1, 10, 0, 0),
        }
        values.update(overrides)
        return Note(**values)

    return _make


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
