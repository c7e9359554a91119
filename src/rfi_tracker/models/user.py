"""Internal staff user model."""

from enum import Enum

from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id
from .mixins import SoftDeleteMixin, TimestampMixin


class Role(str, Enum):
    """Staff roles."""
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"


class User(SoftDeleteMixin, TimestampMixin, Base):
    """Staff member; projects, RFIs, responses and stakeholder links point at users weakly."""
    
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), default=Role.USER.value, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    
    # Relationships
    managed_projects = relationship("Project", back_populates="manager")
    rfis_created = relationship("RFI", back_populates="created_by")
    responses = relationship("Response", back_populates="author")
    added_stakeholders = relationship("ProjectStakeholder", back_populates="added_by")
    
    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
