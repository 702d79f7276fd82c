from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.core import get_db, settings
from app.services import PriceService
from app.schemas.price import PriceCreate, PriceUpdate, PriceResponse

router = APIRouter(prefix="/prices", tags=["Prices"])

@router.post("", response_model=PriceResponse, status_code=201)
def create_price(data: PriceCreate, db: Session = Depends(get_db)):
    return PriceService.create_price(db, data)

@router.get("")
def list_prices(
    product_id: Optional[UUID] = Query(None),
    is_current_price: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    prices, total = PriceService.get_prices(db, product_id, is_current_price, page, per_page)
    return {
        "prices": [PriceResponse.model_validate(p).model_dump(mode="json") for p in prices],
        "total": total,
        "page": page,
        "per_page": per_page
    }

@router.get("/current/{product_id}", response_model=PriceResponse)
def current_price(product_id: UUID, db: Session = Depends(get_db)):
    return PriceService.get_current_price(db, product_id)

@router.get("/{price_id}", response_model=PriceResponse)
def get_price(price_id: UUID, db: Session = Depends(get_db)):
    return PriceService.get_price(db, price_id)

@router.patch("/{price_id}", response_model=PriceResponse)
def update_price(price_id: UUID, data: PriceUpdate, db: Session = Depends(get_db)):
    return PriceService.update_price(db, price_id, data)

@router.post("/{price_id}/promote", response_model=PriceResponse)
def promote_price(price_id: UUID, db: Session = Depends(get_db)):
    return PriceService.promote(db, price_id)

@router.delete("/{price_id}", status_code=204)
def delete_price(price_id: UUID, db: Session = Depends(get_db)):
    PriceService.retire(db, price_id)
