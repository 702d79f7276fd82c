"""
Toggle Active Service - activate/deactivate directory entities
"""
import logging
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core import transaction
from app.core.exceptions import NotFoundError
from app.models import Product, Client, Supplier, AppUser

logger = logging.getLogger(__name__)

class ActiveEntity(str, Enum):
    PRODUCT = "products"
    CLIENT = "clients"
    SUPPLIER = "suppliers"
    USER = "users"

class ActiveFlagRepository:
    """find_by_id / set_active_flag over one model with an is_active column"""
    
    def __init__(self, model, label: str):
        self.model = model
        self.label = label
    
    def find_by_id(self, db: Session, entity_id: UUID) -> Any:
        return db.get(self.model, entity_id)
    
    def set_active_flag(self, instance: Any, is_active: bool) -> None:
        instance.is_active = is_active

REPOSITORIES = {
    ActiveEntity.PRODUCT: ActiveFlagRepository(Product, "Product"),
    ActiveEntity.CLIENT: ActiveFlagRepository(Client, "Client"),
    ActiveEntity.SUPPLIER: ActiveFlagRepository(Supplier, "Supplier"),
    ActiveEntity.USER: ActiveFlagRepository(AppUser, "User"),
}

class ToggleActiveService:
    
    @staticmethod
    def toggle_active(db: Session, entity: ActiveEntity, entity_id: UUID, is_active: bool) -> Any:
        repository = REPOSITORIES[ActiveEntity(entity)]
        
        instance = repository.find_by_id(db, entity_id)
        if instance is None:
            raise NotFoundError(repository.label, entity_id)
        
        with transaction(db):
            repository.set_active_flag(instance, is_active)
        
        state = "activated" if is_active else "deactivated"
        logger.info(f"{repository.label} {entity_id} {state}")
        db.refresh(instance)
        return instance
