"""
Product Models
"""
from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, Text, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Product(Base, UUIDMixin, TimestampMixin):
    """Product Master"""
    __tablename__ = "product"
    
    sku = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(300), nullable=False)
    description = Column(Text)
    supplier_id = Column(Uuid(as_uuid=True), ForeignKey("supplier.id"), nullable=False, index=True)
    
    # Stock counter, only ever moved by StockService.adjust_stock
    current_stock = Column(Integer, default=0, nullable=False)
    min_quantity = Column(Integer, default=0, nullable=False)  # Low stock alert threshold
    max_quantity = Column(Integer)  # High stock alert threshold (optional)
    is_active = Column(Boolean, default=True)
    
    # Relationships
    supplier = relationship("Supplier", back_populates="products")
    movements = relationship("InventoryMovement", back_populates="product")
    prices = relationship("Price", back_populates="product", order_by="Price.valid_from.desc()")
    sale_details = relationship("SaleDetail", back_populates="product")
    
    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="ck_product_stock_non_negative"),
    )
