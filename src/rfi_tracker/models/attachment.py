"""Attachment model; the file itself lives in the upload directory under ``stored_name``."""

from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id


class Attachment(Base):
    """File attached to an RFI."""
    
    __tablename__ = "attachments"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    rfi_id = Column(String(36), ForeignKey("rfis.id"), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    stored_name = Column(String(255), unique=True, nullable=False)
    mime_type = Column(String(100), nullable=True)
    size = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    rfi = relationship("RFI", back_populates="attachments")
    
    def __repr__(self) -> str:
        return f"<Attachment(id={self.id}, stored_name='{self.stored_name}', rfi_id={self.rfi_id})>"
