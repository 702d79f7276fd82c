"""
Sale Models
"""
from sqlalchemy import Column, Numeric, Integer, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Sale(Base, UUIDMixin, TimestampMixin):
    """Sale Header"""
    __tablename__ = "sale"
    
    client_id = Column(Uuid(as_uuid=True), ForeignKey("client.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"))
    sale_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    total_amount = Column(Numeric(12, 2), default=0, nullable=False)  # Sum of detail subtotals
    notes = Column(Text)
    
    # Relationships
    client = relationship("Client", back_populates="sales")
    user = relationship("AppUser", back_populates="sales")
    details = relationship("SaleDetail", back_populates="sale", cascade="all, delete-orphan")
    movements = relationship("InventoryMovement", back_populates="sale")

class SaleDetail(Base, UUIDMixin):
    """Sale Line"""
    __tablename__ = "sale_detail"
    
    sale_id = Column(Uuid(as_uuid=True), ForeignKey("sale.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False)
    
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)  # Snapshot at sale time
    discount_amount = Column(Numeric(12, 2), default=0, nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)  # unit_price * quantity - discount_amount
    
    # Relationships
    sale = relationship("Sale", back_populates="details")
    product = relationship("Product", back_populates="sale_details")
