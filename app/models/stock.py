"""
Stock & Inventory Models
"""
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core import Base
from .base import UUIDMixin

class MovementType(str, enum.Enum):
    ENTRY = "ENTRY"
    EXIT = "EXIT"

class MovementReason:
    """Well-known values for InventoryMovement.reason"""
    PURCHASE = "PURCHASE"
    SALE = "SALE"
    SALE_CANCELLATION = "SALE_CANCELLATION"
    RETURN = "RETURN"
    DAMAGE = "DAMAGE"
    ADJUSTMENT = "ADJUSTMENT"
    INITIAL_STOCK = "INITIAL_STOCK"

class InventoryMovement(Base, UUIDMixin):
    """Stock Movement Ledger (append-only)"""
    __tablename__ = "inventory_movement"
    
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    supplier_id = Column(Uuid(as_uuid=True), ForeignKey("supplier.id"), index=True)
    sale_id = Column(Uuid(as_uuid=True), ForeignKey("sale.id", ondelete="SET NULL"), index=True)
    
    # Movement info
    movement_type = Column(String(10), nullable=False)  # ENTRY, EXIT
    quantity = Column(Integer, nullable=False)  # Always positive, sign comes from movement_type
    
    # Reference (kept after the originating document is removed)
    reference_type = Column(String(30))  # SALE, ADJUSTMENT
    reference_id = Column(String(50))
    
    # Mutable metadata
    reason = Column(String(100))
    notes = Column(Text)
    
    movement_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"))
    
    # Relationships
    product = relationship("Product", back_populates="movements")
    supplier = relationship("Supplier", back_populates="movements")
    sale = relationship("Sale", back_populates="movements")
    user = relationship("AppUser", back_populates="movements")
    
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_movement_quantity_positive"),
    )
    
    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.movement_type == MovementType.ENTRY.value else -self.quantity
