"""Response model."""

from sqlalchemy import Column, String, ForeignKey, Text
from sqlalchemy.orm import relationship

from rfi_tracker.core.base import Base, generate_id
from .mixins import TimestampMixin


class Response(TimestampMixin, Base):
    """Answer posted on an RFI. ``author_id`` becomes null when its author is removed."""
    
    __tablename__ = "responses"
    
    id = Column(String(36), primary_key=True, default=generate_id)
    rfi_id = Column(String(36), ForeignKey("rfis.id"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    
    rfi = relationship("RFI", back_populates="responses")
    author = relationship("User", back_populates="responses")
    
    def __repr__(self) -> str:
        return f"<Response(id={self.id}, rfi_id={self.rfi_id})>"
