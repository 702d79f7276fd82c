from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.core import get_db, settings
from app.api.deps import get_current_user_id
from app.services import SaleService
from app.schemas.sale import SaleCreate, SaleUpdate, SaleResponse

router = APIRouter(prefix="/sales", tags=["Sales"])

@router.post("", response_model=SaleResponse, status_code=201)
def create_sale(
    data: SaleCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id)
):
    return SaleService.create_sale(db, data, user_id)

@router.get("")
def list_sales(
    client_id: Optional[UUID] = Query(None),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    sales, total = SaleService.get_sales(db, client_id, date_from, date_to, page, per_page)
    return {
        "sales": [SaleResponse.model_validate(s).model_dump(mode="json") for s in sales],
        "total": total,
        "page": page,
        "per_page": per_page
    }

@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(sale_id: UUID, db: Session = Depends(get_db)):
    return SaleService.get_sale(db, sale_id)

@router.patch("/{sale_id}", response_model=SaleResponse)
def update_sale(sale_id: UUID, data: SaleUpdate, db: Session = Depends(get_db)):
    return SaleService.update_sale(db, sale_id, data)

@router.delete("/{sale_id}", status_code=204)
def cancel_sale(
    sale_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id)
):
    SaleService.remove_sale(db, sale_id, user_id)
