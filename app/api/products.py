from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.core import get_db, settings
from app.api.deps import get_current_user_id
from app.services import ProductService, MovementService
from app.schemas.product import ProductCreate, ProductResponse, StockAdjustment
from app.schemas.stock import MovementResponse

router = APIRouter(prefix="/products", tags=["Products"])

def _product_dict(p) -> dict:
    return ProductResponse.model_validate(p).model_dump(mode="json")

@router.get("")
def list_products(
    search: Optional[str] = Query(None),
    supplier_id: Optional[UUID] = Query(None),
    active_only: bool = Query(True),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    products, total = ProductService.get_products(db, search, supplier_id, active_only, page, per_page)
    return {
        "products": [_product_dict(p) for p in products],
        "total": total,
        "page": page,
        "per_page": per_page
    }

@router.post("", response_model=ProductResponse, status_code=201)
def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    return ProductService.create_product(db, data)

@router.get("/alerts")
def stock_alerts(db: Session = Depends(get_db)):
    """Products below their minimum or above their maximum quantity"""
    alerts = MovementService.get_stock_alerts(db)
    return {
        "low_stock": [_product_dict(p) for p in alerts["low_stock"]],
        "high_stock": [_product_dict(p) for p in alerts["high_stock"]],
    }

@router.get("/stock-status")
def stock_status(db: Session = Depends(get_db)):
    report = ProductService.get_stock_status_report(db)
    summary = dict(report["summary"])
    summary["total_stock_value"] = float(summary["total_stock_value"])
    return {
        "summary": summary,
        "low_stock": [_product_dict(p) for p in report["low_stock"]],
        "high_stock": [_product_dict(p) for p in report["high_stock"]],
        "optimal_stock": [_product_dict(p) for p in report["optimal_stock"]],
    }

@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: UUID, db: Session = Depends(get_db)):
    return ProductService.get_product(db, product_id)

@router.post("/{product_id}/adjust-stock", response_model=ProductResponse)
def adjust_stock(
    product_id: UUID,
    data: StockAdjustment,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id)
):
    return ProductService.adjust_stock(db, product_id, data, user_id)

@router.get("/{product_id}/movements")
def product_movements(
    product_id: UUID,
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    movements, total = MovementService.get_product_movements(db, product_id, date_from, date_to, page, per_page)
    return {
        "movements": [MovementResponse.model_validate(m).model_dump(mode="json") for m in movements],
        "total": total,
        "page": page,
        "per_page": per_page
    }
