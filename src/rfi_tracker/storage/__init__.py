"""Attachment file storage."""

from .file_store import AttachmentFileStore

__all__ = ["AttachmentFileStore"]
