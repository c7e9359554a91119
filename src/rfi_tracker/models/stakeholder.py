"""Project access models: stakeholder links, access requests and registration tokens."""

from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id


class ProjectStakeholder(Base):
    """Link granting a contact access to a project. Never soft deleted."""
    
    __tablename__ = "project_stakeholders"
    __table_args__ = (
        UniqueConstraint("project_id", "contact_id", name="uq_project_stakeholder"),
    )
    
    id = Column(String(36), primary_key=True, default=generate_id)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    contact_id = Column(String(36), ForeignKey("contacts.id"), nullable=False, index=True)
    added_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    project = relationship("Project", back_populates="stakeholders")
    contact = relationship("Contact", back_populates="project_links")
    added_by = relationship("User", back_populates="added_stakeholders")
    
    def __repr__(self) -> str:
        return f"<ProjectStakeholder(project_id={self.project_id}, contact_id={self.contact_id})>"


class AccessRequest(Base):
    """Contact's request to be granted access to a project."""
    
    __tablename__ = "access_requests"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    contact_id = Column(String(36), ForeignKey("contacts.id"), nullable=True, index=True)
    status = Column(String(20), default="PENDING", nullable=False)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    project = relationship("Project", back_populates="access_requests")
    
    def __repr__(self) -> str:
        return f"<AccessRequest(id={self.id}, project_id={self.project_id}, status='{self.status}')>"


class RegistrationToken(Base):
    """One-time token letting a contact set up stakeholder credentials."""
    
    __tablename__ = "registration_tokens"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    token = Column(String(128), unique=True, nullable=False)
    email = Column(String(255), nullable=False)
    contact_id = Column(String(36), ForeignKey("contacts.id"), nullable=True, index=True)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    contact = relationship("Contact", back_populates="registration_tokens")
    
    def __repr__(self) -> str:
        return f"<RegistrationToken(id={self.id}, email='{self.email}')>"
