"""Tests for the error taxonomy."""

import pytest

from rfi_tracker.core.error_handling import (
    DatabaseError,
    DependencyConflictError,
    EntityNotFoundError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    FileStorageError,
    RFITrackerError,
    ValidationError,
    http_status_for,
    is_client_error,
)


class TestErrorTaxonomy:
    """Test error classes and their HTTP mapping."""

    @pytest.mark.parametrize("error, status", [
        (ValidationError("bad target", field="reassign_to_user_id"), 400),
        (EntityNotFoundError("RFI", "123"), 404),
        (DependencyConflictError("blocked", blocking={"rfis": 2}), 409),
        (DatabaseError("statement failed"), 500),
        (FileStorageError("write failed", file_path="a.pdf"), 500),
        (RuntimeError("unexpected"), 500),
    ])
    def test_http_status(self, error, status):
        """Test the status a route handler would answer with."""
        assert http_status_for(error) == status
        assert is_client_error(error) is (status < 500)

    def test_not_found_message(self):
        """Test the not-found message names the entity."""
        error = EntityNotFoundError("Client", "abc")

        assert str(error) == "Client not found: abc"
        assert error.category == ErrorCategory.NOT_FOUND
        assert error.entity_type == "Client"

    def test_to_dict(self):
        """Test structured error serialization."""
        original = ValueError("boom")
        error = DatabaseError(
            "Failed to delete RFI 1",
            context=ErrorContext(operation="delete_rfi", component="hard_delete", entity_type="RFI", entity_id="1"),
            original_error=original,
        )

        data = error.to_dict()

        assert data["category"] == "database"
        assert data["severity"] == ErrorSeverity.HIGH.value
        assert data["status"] == 500
        assert data["context"]["operation"] == "delete_rfi"
        assert data["context"]["entity_id"] == "1"
        assert data["original_error"] == "boom"
        assert data["original_error_type"] == "ValueError"

    def test_to_dict_without_context(self):
        """Test serialization of an error raised without context."""
        data = DependencyConflictError("blocked").to_dict()

        assert data["context"]["operation"] is None
        assert data["original_error"] is None

    def test_hierarchy(self):
        """Test every error derives from the package base class."""
        for error_type in (ValidationError, EntityNotFoundError, DependencyConflictError,
                           DatabaseError, FileStorageError):
            assert issubclass(error_type, RFITrackerError)
