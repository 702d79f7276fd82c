"""
Master Tables: AppUser, Supplier
"""
from sqlalchemy import Column, String, Boolean, Text
from sqlalchemy.orm import relationship
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class AppUser(Base, UUIDMixin, TimestampMixin):
    """Application User (actor on movements and sales)"""
    __tablename__ = "app_user"
    
    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(200))
    full_name = Column(String(200))
    is_active = Column(Boolean, default=True)
    
    # Relationships
    movements = relationship("InventoryMovement", back_populates="user")
    sales = relationship("Sale", back_populates="user")

class Supplier(Base, UUIDMixin, TimestampMixin):
    """Supplier"""
    __tablename__ = "supplier"
    
    name = Column(String(200), nullable=False)
    contact_name = Column(String(200))
    email = Column(String(200))
    phone_number = Column(String(30))
    address = Column(Text)
    is_active = Column(Boolean, default=True)
    
    # Relationships
    products = relationship("Product", back_populates="supplier")
    movements = relationship("InventoryMovement", back_populates="supplier")
