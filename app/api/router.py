"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
from datetime import datetime

from app.core import get_db
from app.services import ToggleActiveService, ActiveEntity
from app.schemas.product import ToggleActive

from app.api.products import router as products_router
from app.api.movements import router as movements_router
from app.api.prices import router as prices_router
from app.api.sales import router as sales_router

api_router = APIRouter(tags=["API"])

api_router.include_router(products_router)
api_router.include_router(movements_router)
api_router.include_router(prices_router)
api_router.include_router(sales_router)

# ===================== HEALTH & STATUS =====================

@api_router.get("/status")
async def api_status():
    return {"status": "ok", "version": "1.0.0", "timestamp": datetime.now().isoformat()}

# ===================== ACTIVE FLAG =====================

@api_router.patch("/{entity}/{entity_id}/active")
def toggle_active(entity: ActiveEntity, entity_id: UUID, data: ToggleActive, db: Session = Depends(get_db)):
    instance = ToggleActiveService.toggle_active(db, entity, entity_id, data.is_active)
    state = "activated" if data.is_active else "deactivated"
    return {"id": str(instance.id), "is_active": instance.is_active, "message": f"{entity.value} {state}"}
