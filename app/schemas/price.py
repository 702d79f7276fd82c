"""
Price Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from decimal import Decimal
from datetime import datetime

class PriceCreate(BaseModel):
    product_id: UUID
    purchase_price: Decimal = Field(..., gt=0, max_digits=8, decimal_places=2)
    selling_price: Decimal = Field(..., gt=0, max_digits=8, decimal_places=2)
    is_current_price: bool = False

class PriceUpdate(BaseModel):
    purchase_price: Optional[Decimal] = Field(None, gt=0, max_digits=8, decimal_places=2)
    selling_price: Optional[Decimal] = Field(None, gt=0, max_digits=8, decimal_places=2)
    is_current_price: Optional[bool] = None

class PriceResponse(BaseModel):
    id: UUID
    product_id: UUID
    purchase_price: Decimal
    selling_price: Decimal
    is_current_price: bool
    valid_from: Optional[datetime]
    valid_to: Optional[datetime]

    class Config:
        from_attributes = True
