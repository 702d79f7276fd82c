"""
Sale Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

class SaleDetailCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(..., gt=0)
    unit_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)  # Defaults to current selling price
    discount_amount: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)

class SaleCreate(BaseModel):
    client_id: UUID
    sale_date: Optional[datetime] = None
    notes: Optional[str] = None
    details: List[SaleDetailCreate] = Field(..., min_length=1)

class SaleUpdate(BaseModel):
    client_id: Optional[UUID] = None
    sale_date: Optional[datetime] = None
    notes: Optional[str] = None

class SaleDetailResponse(BaseModel):
    id: UUID
    product_id: UUID
    quantity: int
    unit_price: Decimal
    discount_amount: Decimal
    subtotal: Decimal

    class Config:
        from_attributes = True

class SaleResponse(BaseModel):
    id: UUID
    client_id: UUID
    user_id: Optional[UUID]
    sale_date: Optional[datetime]
    total_amount: Decimal
    notes: Optional[str]
    details: List[SaleDetailResponse] = []

    class Config:
        from_attributes = True
