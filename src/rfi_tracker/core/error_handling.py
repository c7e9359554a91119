"""Error taxonomy for the RFI data-lifecycle subsystem.

File deletion problems are never raised; they are collected into deletion
reports. Everything below is a hard failure that propagates to the caller.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from enum import Enum
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification and routing."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DEPENDENCY_CONFLICT = "dependency_conflict"
    DATABASE = "database"
    FILE_SYSTEM = "file_system"


@dataclass
class ErrorContext:
    """Context information for error handling and logging."""
    operation: str
    component: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None


class RFITrackerError(Exception):
    """Base exception class for RFI tracker errors."""

    http_status = 500

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context
        self.original_error = original_error
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and API responses."""
        return {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "status": self.http_status,
            "timestamp": self.timestamp.isoformat(),
            "context": {
                "operation": self.context.operation if self.context else None,
                "component": self.context.component if self.context else None,
                "entity_type": self.context.entity_type if self.context else None,
                "entity_id": self.context.entity_id if self.context else None,
                "additional_data": self.context.additional_data if self.context else None,
            },
            "original_error": str(self.original_error) if self.original_error else None,
            "original_error_type": type(self.original_error).__name__ if self.original_error else None,
        }


class ValidationError(RFITrackerError):
    """Invalid input, e.g. an unusable reassignment target."""

    http_status = 400

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        super().__init__(
            message,
            ErrorCategory.VALIDATION,
            ErrorSeverity.LOW,
            **kwargs
        )
        self.field = field
        self.value = value


class EntityNotFoundError(RFITrackerError):
    """The root entity of an operation does not exist."""

    http_status = 404

    def __init__(self, entity_type: str, entity_id: str, **kwargs):
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            ErrorCategory.NOT_FOUND,
            ErrorSeverity.LOW,
            **kwargs
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class DependencyConflictError(RFITrackerError):
    """Dependent rows block the operation; the message says how to resolve it."""

    http_status = 409

    def __init__(self, message: str, blocking: Optional[Dict[str, int]] = None, **kwargs):
        super().__init__(
            message,
            ErrorCategory.DEPENDENCY_CONFLICT,
            ErrorSeverity.MEDIUM,
            **kwargs
        )
        self.blocking = blocking or {}


class DatabaseError(RFITrackerError):
    """A database statement failed part way through an operation."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.DATABASE,
            ErrorSeverity.HIGH,
            **kwargs
        )


class FileStorageError(RFITrackerError):
    """Writing an attachment file failed."""

    def __init__(self, message: str, file_path: str = None, **kwargs):
        super().__init__(
            message,
            ErrorCategory.FILE_SYSTEM,
            ErrorSeverity.MEDIUM,
            **kwargs
        )
        self.file_path = file_path


CLIENT_ERRORS: List[type] = [ValidationError, EntityNotFoundError, DependencyConflictError]


def http_status_for(error: Exception) -> int:
    """HTTP status a route handler should answer with for ``error``.

    Args:
        error: Exception raised by a service call

    Returns:
        4xx for not-found, conflict and validation errors, 500 otherwise
    """
    if isinstance(error, RFITrackerError):
        return error.http_status
    return 500


def is_client_error(error: Exception) -> bool:
    """Whether ``error`` is the caller's to fix rather than a server fault."""
    return any(isinstance(error, error_type) for error_type in CLIENT_ERRORS)
