"""Tests for attachment file storage."""

import pytest
from unittest.mock import patch

from rfi_tracker.core.error_handling import FileStorageError
from rfi_tracker.storage.file_store import AttachmentFileStore


class TestAttachmentFileStore:
    """Test attachment file store operations."""

    def test_creates_upload_dir(self, tmp_path):
        """Test that the upload directory is created on demand."""
        upload_dir = tmp_path / "nested" / "uploads"

        AttachmentFileStore(upload_dir)

        assert upload_dir.is_dir()

    def test_store_and_delete(self, file_store):
        """Test that a stored file can be deleted exactly once."""
        path = file_store.store("a1.pdf", b"content")
        assert path.read_bytes() == b"content"

        result = file_store.delete_file("a1.pdf", "Drawing A1.pdf")

        assert result.deleted is True
        assert result.error is None
        assert result.filename == "Drawing A1.pdf"
        assert not path.exists()

    def test_delete_missing_file_reports_error(self, file_store):
        """Test that deleting a missing file returns an error instead of raising."""
        result = file_store.delete_file("gone.pdf")

        assert result.deleted is False
        assert result.error == "Failed to delete file gone.pdf: file not found"

    def test_delete_os_error_reports_error(self, file_store):
        """Test that an OS failure during unlink is reported, not raised."""
        file_store.store("locked.pdf", b"x")

        with patch("pathlib.Path.unlink", side_effect=PermissionError("permission denied")):
            result = file_store.delete_file("locked.pdf")

        assert result.deleted is False
        assert "permission denied" in result.error
        assert file_store.exists("locked.pdf")

    @pytest.mark.parametrize("stored_name", ["", "../escape.pdf", "sub/dir.pdf"])
    def test_rejects_names_outside_upload_dir(self, file_store, stored_name):
        """Test that keys cannot point outside the flat upload directory."""
        result = file_store.delete_file(stored_name)

        assert result.deleted is False
        assert result.error.startswith(f"Failed to delete file {stored_name}:")
        assert file_store.exists(stored_name) is False

    def test_store_invalid_name_raises(self, file_store):
        """Test that writing to an invalid key raises FileStorageError."""
        with pytest.raises(FileStorageError) as exc_info:
            file_store.store("../escape.pdf", b"x")

        assert exc_info.value.file_path == "../escape.pdf"
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_generate_stored_name_keeps_extension(self):
        """Test that generated keys are unique and keep the lowercased extension."""
        first = AttachmentFileStore.generate_stored_name("Site Plan.PDF")
        second = AttachmentFileStore.generate_stored_name("Site Plan.PDF")

        assert first.endswith(".pdf")
        assert first != second

    def test_storage_stats(self, file_store):
        """Test storage statistics."""
        file_store.store("a.pdf", b"12345")
        file_store.store("b.pdf", b"123")

        stats = file_store.get_storage_stats()

        assert stats["total_files"] == 2
        assert stats["total_size_bytes"] == 8
