"""Client contact model; contacts with credentials log in as stakeholders."""

from enum import Enum

from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id
from .mixins import SoftDeleteMixin, TimestampMixin


class StakeholderRole(str, Enum):
    """Stakeholder access levels."""
    STAKEHOLDER_L1 = "STAKEHOLDER_L1"
    STAKEHOLDER_L2 = "STAKEHOLDER_L2"


class Contact(SoftDeleteMixin, TimestampMixin, Base):
    """Person at a client organisation."""
    
    __tablename__ = "contacts"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    title = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=True)
    role = Column(String(20), nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    
    # Relationships
    client = relationship("Client", back_populates="contacts")
    project_links = relationship("ProjectStakeholder", back_populates="contact")
    registration_tokens = relationship("RegistrationToken", back_populates="contact")
    
    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, email='{self.email}', client_id={self.client_id})>"
    
    @property
    def can_log_in(self) -> bool:
        """Contacts need both a password and a stakeholder role to sign in."""
        return bool(self.hashed_password and self.role and self.active and not self.is_deleted)
