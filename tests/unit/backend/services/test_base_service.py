"""
Unit Tests for Base Service.

Tests the BaseService error wrapping and validation helpers.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from notekeeper.backend.core.exceptions import DatabaseError, ValidationError
from notekeeper.backend.services.base import BaseService


@pytest.fixture
def service():
    """Create a BaseService instance."""
    return BaseService(AsyncMock())


class TestExecuteDbOperation:
    """Tests for _execute_db_operation."""

    async def test_returns_result_on_success(self, service):
        async def succeed():
            return ["note-1", "note-2"]

        result = await service._execute_db_operation("restore_notes", succeed())

        assert result == ["note-1", "note-2"]

    async def test_integrity_error_becomes_database_error(self, service):
        """Constraint violations (e.g. the trash-time check) are DatabaseError."""

        async def fail():
            raise IntegrityError(
                "statement",
                {},
                Exception("CHECK constraint failed: deleted_after_created"),
            )

        with pytest.raises(DatabaseError, match="constraint violation: delete_note"):
            await service._execute_db_operation("delete_note", fail())

    async def test_sqlalchemy_error_becomes_database_error(self, service):
        async def fail():
            raise SQLAlchemyError("Connection lost")

        with pytest.raises(DatabaseError, match="operation failed: list_notes"):
            await service._execute_db_operation("list_notes", fail())

    async def test_application_errors_pass_through(self, service):
        """Non-database exceptions are not rewrapped."""

        async def fail():
            raise ValidationError("bad input")

        with pytest.raises(ValidationError):
            await service._execute_db_operation("create_note", fail())


class TestValidateRequired:
    """Tests for _validate_required."""

    def test_passes_when_all_fields_present(self, service):
        service._validate_required({"title": "Groceries"}, ["title"])

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_rejects_missing_or_blank(self, service, value):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required({"title": value}, ["title"])

        assert exc_info.value.details == {"missing_fields": ["title"]}

    def test_reports_all_missing_fields(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required({}, ["title", "content"])

        assert exc_info.value.details["missing_fields"] == ["title", "content"]


class TestValidateStringLength:
    """Tests for _validate_string_length."""

    def test_passes_when_length_in_bounds(self, service):
        service._validate_string_length("hello", "title", min_length=1, max_length=255)

    def test_raises_when_too_long(self, service):
        with pytest.raises(ValidationError, match="title too long"):
            service._validate_string_length("x" * 256, "title", max_length=255)

    def test_raises_when_too_short(self, service):
        with pytest.raises(ValidationError, match="title too short"):
            service._validate_string_length("", "title", min_length=1)


class TestLoggingMethods:
    """Tests for the logging helpers."""

    def test_log_operation_includes_service_name(self, service):
        service._logger = MagicMock()

        service._log_operation("Restored notes", restored=2)

        service._logger.info.assert_called_once_with(
            "Restored notes",
            extra={"service": "BaseService", "restored": 2},
        )

    def test_log_debug_includes_service_name(self, service):
        service._logger = MagicMock()

        service._log_debug("Listing notes", deleted=True)

        service._logger.debug.assert_called_once_with(
            "Listing notes",
            extra={"service": "BaseService", "deleted": True},
        )
