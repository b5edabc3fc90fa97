"""
Unit Test Fixtures.

Fixtures for unit tests - external dependencies are mocked.
Repository tests are the exception: they run against the in-memory
SQLite session from the root conftest, since the SQL is what they test.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    return session


# =============================================================================
# Note Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_note() -> MagicMock:
    """
    Mock note row with the attributes the API layer reads.

    Usage:
        def test_something(mock_note):
            mock_note.title = "Changed"
    """
    from datetime import datetime

    note = MagicMock()
    note.id = "note-123"
    note.owner_id = "owner-alice"
    note.title = "Test Note"
    note.content = "Test content"
    note.created_at = datetime(2024, 1, 1, 12, 0, 0)
    note.updated_at = datetime(2024, 1, 1, 12, 0, 0)
    note.deleted_at = None
    return note


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            log_with_source(mock_logger, "cli", "info", "hello")
            mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
