"""Email audit and delivery records attached to RFIs."""

from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id


class EmailLog(Base):
    """Record of an email sent about an RFI."""
    
    __tablename__ = "email_logs"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    rfi_id = Column(String(36), ForeignKey("rfis.id"), nullable=False, index=True)
    recipient = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=True)
    status = Column(String(20), default="SENT", nullable=False)
    sent_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    rfi = relationship("RFI", back_populates="email_logs")
    
    def __repr__(self) -> str:
        return f"<EmailLog(id={self.id}, rfi_id={self.rfi_id}, status='{self.status}')>"


class EmailQueue(Base):
    """Email waiting to be delivered for an RFI."""
    
    __tablename__ = "email_queue"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    rfi_id = Column(String(36), ForeignKey("rfis.id"), nullable=False, index=True)
    recipient = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=True)
    status = Column(String(20), default="PENDING", nullable=False)
    scheduled_for = Column(DateTime, default=datetime.utcnow, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    
    rfi = relationship("RFI", back_populates="email_queue")
    
    def __repr__(self) -> str:
        return f"<EmailQueue(id={self.id}, rfi_id={self.rfi_id}, status='{self.status}')>"
