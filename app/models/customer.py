"""
Customer Models
"""
from sqlalchemy import Column, String, Boolean, Text
from sqlalchemy.orm import relationship
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Client(Base, UUIDMixin, TimestampMixin):
    """Client (buyer on a sale)"""
    __tablename__ = "client"
    
    name = Column(String(200), nullable=False)
    email = Column(String(200))
    phone = Column(String(20), index=True)
    address = Column(Text)
    is_active = Column(Boolean, default=True)
    
    # Relationships
    sales = relationship("Sale", back_populates="client")
