"""
Price History Models
"""
from sqlalchemy import Column, Numeric, Boolean, DateTime, ForeignKey, Index, Uuid, text, func
from sqlalchemy.orm import relationship
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Price(Base, UUIDMixin, TimestampMixin):
    """Purchase/selling price of a product over time"""
    __tablename__ = "price"
    
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    purchase_price = Column(Numeric(12, 2), nullable=False)
    selling_price = Column(Numeric(12, 2), nullable=False)
    
    is_current_price = Column(Boolean, default=False, nullable=False)
    valid_from = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    valid_to = Column(DateTime(timezone=True))  # NULL while current
    
    # Relationships
    product = relationship("Product", back_populates="prices")
    
    # At most one current price per product
    __table_args__ = (
        Index(
            "uq_price_current_per_product",
            "product_id",
            unique=True,
            postgresql_where=text("is_current_price"),
            sqlite_where=text("is_current_price = 1"),
        ),
    )
