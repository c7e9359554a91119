"""Client model for the organisations RFIs are raised for."""

from sqlalchemy import Column, String, Boolean, Text
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id
from .mixins import SoftDeleteMixin, TimestampMixin


class Client(SoftDeleteMixin, TimestampMixin, Base):
    """Client owning projects, contacts and project-less RFIs."""
    
    __tablename__ = "clients"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    
    # Relationships
    projects = relationship("Project", back_populates="client")
    contacts = relationship("Contact", back_populates="client")
    rfis = relationship("RFI", back_populates="client")
    
    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"
