from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.core import get_db, settings
from app.api.deps import get_current_user_id
from app.models import MovementType
from app.services import MovementService
from app.schemas.stock import MovementCreate, MovementUpdate, MovementResponse

router = APIRouter(prefix="/inventory-movements", tags=["Inventory Movements"])

def _movement_dict(m) -> dict:
    return MovementResponse.model_validate(m).model_dump(mode="json")

@router.post("", response_model=MovementResponse, status_code=201)
def record_movement(
    data: MovementCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id)
):
    return MovementService.record(db, data, user_id)

@router.get("")
def list_movements(
    movement_type: Optional[MovementType] = Query(None),
    product_id: Optional[UUID] = Query(None),
    supplier_id: Optional[UUID] = Query(None),
    sale_id: Optional[UUID] = Query(None),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    reason: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    movements, total = MovementService.get_movements(
        db, movement_type, product_id, supplier_id, sale_id, date_from, date_to, reason, page, per_page
    )
    return {
        "movements": [_movement_dict(m) for m in movements],
        "total": total,
        "page": page,
        "per_page": per_page
    }

@router.get("/report")
def stock_transactions_report(
    date_from: datetime = Query(...),
    date_to: datetime = Query(...),
    db: Session = Depends(get_db)
):
    report = MovementService.generate_stock_transactions_report(db, date_from, date_to)
    return {
        "summary": report["summary"],
        "top_products": report["top_products"],
        "movements": [_movement_dict(m) for m in report["movements"]],
    }

@router.get("/{movement_id}", response_model=MovementResponse)
def get_movement(movement_id: UUID, db: Session = Depends(get_db)):
    return MovementService.get_movement(db, movement_id)

@router.patch("/{movement_id}", response_model=MovementResponse)
def update_movement(movement_id: UUID, data: MovementUpdate, db: Session = Depends(get_db)):
    return MovementService.update_movement(db, movement_id, data)

@router.delete("/{movement_id}")
def delete_movement(movement_id: UUID, db: Session = Depends(get_db)):
    MovementService.remove_movement(db, movement_id)
