"""File storage for RFI attachments.

Attachments live flat in one upload directory, keyed by their stored name.
Deleting never raises: a file that cannot be removed is reported back so the
caller can carry on with the remaining files and the database cleanup.
"""

import uuid
from pathlib import Path
from typing import Optional, Union
import structlog

from rfi_tracker.core.error_handling import FileStorageError
from rfi_tracker.schemas.deletion import FileDeletionResult

logger = structlog.get_logger(__name__)


class AttachmentFileStore:
    """Reads, writes and removes attachment files in the upload directory."""

    def __init__(self, upload_dir: Union[str, Path] = "uploads"):
        """Initialize the file store.

        Args:
            upload_dir: Directory holding attachment files
        """
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

        logger.info("Attachment file store initialized", upload_dir=str(self.upload_dir))

    def _resolve(self, stored_name: str) -> Path:
        """Path of a stored file.

        Raises:
            ValueError: If the key is empty or escapes the upload directory
        """
        if not stored_name:
            raise ValueError("Stored name is empty")

        base = self.upload_dir.resolve()
        path = (base / stored_name).resolve()
        if path.parent != base:
            raise ValueError(f"Invalid stored name: {stored_name}")
        return path

    @staticmethod
    def generate_stored_name(filename: str) -> str:
        """Unique storage key preserving the original extension."""
        return f"{uuid.uuid4()}{Path(filename).suffix.lower()}"

    def store(self, stored_name: str, content: bytes) -> Path:
        """Write an attachment file.

        Args:
            stored_name: Storage key
            content: File content

        Returns:
            Path of the written file

        Raises:
            FileStorageError: If the key is invalid or the write fails
        """
        try:
            path = self._resolve(stored_name)
            path.write_bytes(content)

            if path.stat().st_size != len(content):
                raise OSError(f"File verification failed for {path}")

            logger.info("Attachment stored", stored_name=stored_name, size_bytes=len(content))
            return path

        except (OSError, ValueError) as e:
            logger.error("Failed to store attachment", stored_name=stored_name, error=str(e))
            raise FileStorageError(
                f"Failed to store attachment {stored_name}: {str(e)}",
                file_path=stored_name,
                original_error=e
            )

    def exists(self, stored_name: str) -> bool:
        """Whether a stored file is present."""
        try:
            return self._resolve(stored_name).is_file()
        except ValueError:
            return False

    def delete_file(self, stored_name: str, filename: Optional[str] = None) -> FileDeletionResult:
        """Delete a stored file.

        Args:
            stored_name: Storage key of the file
            filename: Display name, for reporting only

        Returns:
            Outcome of the deletion; failures carry an error message
        """
        try:
            path = self._resolve(stored_name)
            path.unlink()
            logger.info("File deleted successfully", stored_name=stored_name)
            return FileDeletionResult(stored_name=stored_name, filename=filename, deleted=True)

        except FileNotFoundError:
            error = f"Failed to delete file {stored_name}: file not found"
        except (OSError, ValueError) as e:
            error = f"Failed to delete file {stored_name}: {e}"

        logger.warning("File deletion failed", stored_name=stored_name, filename=filename, error=error)
        return FileDeletionResult(stored_name=stored_name, filename=filename, deleted=False, error=error)

    def get_storage_stats(self) -> dict:
        """Get storage statistics.

        Returns:
            Dictionary with storage statistics
        """
        total_files = 0
        total_size = 0

        for file_path in self.upload_dir.iterdir():
            if file_path.is_file():
                total_files += 1
                total_size += file_path.stat().st_size

        return {
            "total_files": total_files,
            "total_size_bytes": total_size,
            "total_size_mb": round(total_size / (1024 * 1024), 2),
            "upload_dir": str(self.upload_dir)
        }
