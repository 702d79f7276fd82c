"""
Product Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from decimal import Decimal
from enum import Enum

class ProductCreate(BaseModel):
    sku: str
    name: str
    description: Optional[str] = None
    supplier_id: UUID
    min_quantity: int = Field(0, ge=0)
    max_quantity: Optional[int] = Field(None, ge=0)
    # Initial current price (optional, both or neither)
    purchase_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    selling_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)

class StockAdjustmentType(str, Enum):
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"

class StockAdjustment(BaseModel):
    type: StockAdjustmentType
    quantity: int = Field(..., gt=0)
    reason: Optional[str] = None
    notes: Optional[str] = None

class ProductResponse(BaseModel):
    id: UUID
    sku: str
    name: str
    description: Optional[str]
    supplier_id: UUID
    current_stock: int
    min_quantity: int
    max_quantity: Optional[int]
    is_active: bool

    class Config:
        from_attributes = True

class ToggleActive(BaseModel):
    is_active: bool
