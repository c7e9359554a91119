"""Column mixins shared by several models."""

from datetime import datetime

from sqlalchemy import Column, DateTime

from rfi_tracker.core.soft_delete import mark_deleted, mark_restored, values_for


class TimestampMixin:
    """Creation and modification timestamps."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class SoftDeleteMixin:
    """Nullable ``deleted_at`` marker; a set marker hides the row from default reads."""

    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        """Check if the row is soft deleted."""
        return self.deleted_at is not None

    def soft_delete(self, now: datetime = None) -> None:
        """Perform soft delete by setting the marker (and clearing ``active``)."""
        for key, value in values_for(type(self), mark_deleted(now)).items():
            setattr(self, key, value)

    def restore(self) -> None:
        """Clear the soft-delete marker and reactivate the row."""
        for key, value in values_for(type(self), mark_restored()).items():
            setattr(self, key, value)
        if hasattr(self, "active"):
            self.active = True
