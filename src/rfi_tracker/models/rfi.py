"""RFI (request for information) model."""

from enum import Enum

from sqlalchemy import Column, String, ForeignKey, Text, Index, text
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id
from .mixins import SoftDeleteMixin, TimestampMixin


class RFIStatus(str, Enum):
    """RFI workflow states."""
    DRAFT = "DRAFT"
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    CLOSED = "CLOSED"


class Priority(str, Enum):
    """RFI priority."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class RFI(SoftDeleteMixin, TimestampMixin, Base):
    """Request for information raised on a project (or directly for a client)."""
    
    __tablename__ = "rfis"
    __table_args__ = (
        # rfi_number is unique per project among rows that are not soft deleted
        Index(
            "uq_rfis_project_number_active",
            "project_id",
            "rfi_number",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
    
    id = Column(String(36), primary_key=True, default=generate_id)
    rfi_number = Column(String(50), nullable=False)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True, index=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), default=RFIStatus.DRAFT.value, nullable=False)
    priority = Column(String(20), default=Priority.MEDIUM.value, nullable=False)
    
    # Relationships
    client = relationship("Client", back_populates="rfis")
    project = relationship("Project", back_populates="rfis")
    created_by = relationship("User", back_populates="rfis_created")
    attachments = relationship("Attachment", back_populates="rfi")
    responses = relationship("Response", back_populates="rfi")
    email_logs = relationship("EmailLog", back_populates="rfi")
    email_queue = relationship("EmailQueue", back_populates="rfi")
    
    def __repr__(self) -> str:
        return f"<RFI(id={self.id}, rfi_number='{self.rfi_number}', project_id={self.project_id})>"
