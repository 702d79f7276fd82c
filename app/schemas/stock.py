"""
Stock Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models.stock import MovementType

class MovementCreate(BaseModel):
    movement_type: MovementType
    quantity: int = Field(..., gt=0)
    product_id: UUID
    supplier_id: Optional[UUID] = None  # Required for ENTRY
    sale_id: Optional[UUID] = None
    reason: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)

class MovementUpdate(BaseModel):
    """Only reason and notes may change; the other fields exist so attempts can be refused"""
    reason: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    movement_type: Optional[MovementType] = None
    quantity: Optional[int] = None
    product_id: Optional[UUID] = None
    supplier_id: Optional[UUID] = None
    sale_id: Optional[UUID] = None

class MovementResponse(BaseModel):
    id: UUID
    movement_type: str
    quantity: int
    product_id: UUID
    supplier_id: Optional[UUID]
    sale_id: Optional[UUID]
    reference_type: Optional[str]
    reference_id: Optional[str]
    reason: Optional[str]
    notes: Optional[str]
    user_id: Optional[UUID]
    movement_date: Optional[datetime]

    class Config:
        from_attributes = True
