"""Project model."""

from sqlalchemy import Column, String, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id
from .mixins import SoftDeleteMixin, TimestampMixin


class Project(SoftDeleteMixin, TimestampMixin, Base):
    """Construction project for a client; owns RFIs, stakeholder links and access requests."""
    
    __tablename__ = "projects"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    manager_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    project_number = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    status = Column(String(20), default="ACTIVE", nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    
    # Relationships
    client = relationship("Client", back_populates="projects")
    manager = relationship("User", back_populates="managed_projects")
    rfis = relationship("RFI", back_populates="project")
    stakeholders = relationship("ProjectStakeholder", back_populates="project")
    access_requests = relationship("AccessRequest", back_populates="project")
    
    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}', client_id={self.client_id})>"
