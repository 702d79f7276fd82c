"""
Movement Service - Inventory movement ledger
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple, Dict
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy import case, func

from app.core import transaction
from app.core.exceptions import NotFoundError, InvalidArgumentError, InsufficientStockError
from app.models import InventoryMovement, MovementType, Product, Supplier, Sale, AppUser
from app.schemas.stock import MovementCreate, MovementUpdate
from .stock_service import StockService

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("movement_type", "quantity", "product_id", "supplier_id", "sale_id")

class MovementService:
    """Inventory movement business logic"""
    
    @staticmethod
    def check_user(db: Session, user_id: Optional[UUID]) -> None:
        """Acting user must exist when one is given"""
        if user_id and not db.get(AppUser, user_id):
            raise NotFoundError("User", user_id)
    
    @staticmethod
    def append_movement(
        db: Session,
        product_id: UUID,
        movement_type: MovementType,
        quantity: int,
        user_id: Optional[UUID] = None,
        supplier_id: Optional[UUID] = None,
        sale_id: Optional[UUID] = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[str] = None,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> InventoryMovement:
        """Write one ledger row and its stock delta. The caller owns the transaction."""
        movement_type = MovementType(movement_type)
        delta = quantity if movement_type == MovementType.ENTRY else -quantity
        
        StockService.adjust_stock(db, product_id, delta)
        
        movement = InventoryMovement(
            product_id=product_id,
            movement_type=movement_type.value,
            quantity=quantity,
            supplier_id=supplier_id,
            sale_id=sale_id,
            reference_type=reference_type,
            reference_id=reference_id,
            reason=reason,
            notes=notes,
            user_id=user_id,
            movement_date=datetime.now()
        )
        db.add(movement)
        db.flush()
        return movement
    
    @staticmethod
    def record(db: Session, movement_data: MovementCreate, user_id: Optional[UUID] = None) -> InventoryMovement:
        """
        Validate and persist a single ENTRY/EXIT movement.
        
        Checks run in order: supplier present for entries, product, supplier,
        sale. The stock delta and the ledger row commit together.
        """
        movement_type = MovementType(movement_data.movement_type)
        
        if movement_type == MovementType.ENTRY and not movement_data.supplier_id:
            raise InvalidArgumentError("Supplier ID is required for inventory entries")
        
        product = db.get(Product, movement_data.product_id)
        if not product:
            raise NotFoundError("Product", movement_data.product_id)
        
        if movement_data.supplier_id and not db.get(Supplier, movement_data.supplier_id):
            raise NotFoundError("Supplier", movement_data.supplier_id)
        
        if movement_data.sale_id and not db.get(Sale, movement_data.sale_id):
            raise NotFoundError("Sale", movement_data.sale_id)
        
        MovementService.check_user(db, user_id)
        
        with transaction(db):
            if movement_type == MovementType.EXIT:
                product = StockService.lock_product(db, movement_data.product_id)
                if product.current_stock < movement_data.quantity:
                    logger.warning(
                        f"EXIT of {movement_data.quantity} refused for {product.sku}: "
                        f"only {product.current_stock} on hand"
                    )
                    raise InsufficientStockError(
                        product.id, product.name, product.current_stock, movement_data.quantity
                    )
            
            movement = MovementService.append_movement(
                db,
                product_id=movement_data.product_id,
                movement_type=movement_type,
                quantity=movement_data.quantity,
                user_id=user_id,
                supplier_id=movement_data.supplier_id,
                sale_id=movement_data.sale_id,
                reference_type="SALE" if movement_data.sale_id else None,
                reference_id=str(movement_data.sale_id) if movement_data.sale_id else None,
                reason=movement_data.reason,
                notes=movement_data.notes
            )
        
        logger.info(f"Recorded {movement.movement_type} x{movement.quantity} for product {movement.product_id}")
        db.refresh(movement)
        return movement
    
    @staticmethod
    def get_movement(db: Session, movement_id: UUID) -> InventoryMovement:
        movement = db.query(InventoryMovement).filter(InventoryMovement.id == movement_id).first()
        if not movement:
            raise NotFoundError("Inventory movement", movement_id)
        return movement
    
    @staticmethod
    def get_movements(
        db: Session,
        movement_type: Optional[str] = None,
        product_id: Optional[UUID] = None,
        supplier_id: Optional[UUID] = None,
        sale_id: Optional[UUID] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        reason: Optional[str] = None,
        page: int = 1,
        per_page: int = 10
    ) -> Tuple[List[InventoryMovement], int]:
        """Get movements with filters and pagination, newest first"""
        query = db.query(InventoryMovement)
        
        if movement_type:
            query = query.filter(InventoryMovement.movement_type == MovementType(movement_type).value)
        
        if product_id:
            query = query.filter(InventoryMovement.product_id == product_id)
        
        if supplier_id:
            query = query.filter(InventoryMovement.supplier_id == supplier_id)
        
        if sale_id:
            query = query.filter(InventoryMovement.sale_id == sale_id)
        
        if reason:
            query = query.filter(InventoryMovement.reason.ilike(f"%{reason}%"))
        
        if date_from:
            query = query.filter(InventoryMovement.movement_date >= date_from)
        
        if date_to:
            query = query.filter(InventoryMovement.movement_date <= date_to)
        
        total = query.count()
        
        movements = query.order_by(InventoryMovement.movement_date.desc())\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()
        
        return movements, total
    
    @staticmethod
    def get_product_movements(
        db: Session,
        product_id: UUID,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        page: int = 1,
        per_page: int = 10
    ) -> Tuple[List[InventoryMovement], int]:
        """Movement history for one product"""
        if not db.get(Product, product_id):
            raise NotFoundError("Product", product_id)
        
        return MovementService.get_movements(
            db, product_id=product_id, date_from=date_from, date_to=date_to, page=page, per_page=per_page
        )
    
    @staticmethod
    def get_net_quantity(db: Session, product_id: UUID) -> int:
        """Signed sum of the ledger for a product (ENTRY minus EXIT)"""
        net = db.query(
            func.sum(
                case(
                    (InventoryMovement.movement_type == MovementType.ENTRY.value, InventoryMovement.quantity),
                    else_=-InventoryMovement.quantity
                )
            )
        ).filter(InventoryMovement.product_id == product_id).scalar()
        return int(net or 0)
    
    @staticmethod
    def update_movement(db: Session, movement_id: UUID, movement_data: MovementUpdate) -> InventoryMovement:
        """Update reason/notes. Quantities and references are permanent."""
        movement = MovementService.get_movement(db, movement_id)
        
        changes = movement_data.model_dump(exclude_unset=True)
        if any(field in changes for field in IMMUTABLE_FIELDS):
            logger.warning(f"Refused change of ledger fields on movement {movement_id}")
            raise InvalidArgumentError(
                "Cannot update movement type, quantity, product, supplier, or sale. "
                "Create a new movement instead."
            )
        
        with transaction(db):
            for field, value in changes.items():
                setattr(movement, field, value)
        
        logger.info(f"Movement {movement_id} updated: {', '.join(changes)}")
        db.refresh(movement)
        return movement
    
    @staticmethod
    def remove_movement(db: Session, movement_id: UUID) -> None:
        MovementService.get_movement(db, movement_id)
        logger.warning(f"Refused deletion of movement {movement_id}")
        raise InvalidArgumentError(
            "Inventory movements cannot be deleted to maintain accurate stock history."
        )
    
    @staticmethod
    def get_stock_alerts(db: Session) -> Dict[str, List[Product]]:
        """Active products below min_quantity (low) or above max_quantity (high)"""
        low_stock = db.query(Product).filter(
            Product.is_active == True,
            Product.current_stock < Product.min_quantity
        ).order_by(Product.current_stock.asc()).all()
        
        high_stock = db.query(Product).filter(
            Product.is_active == True,
            Product.max_quantity.isnot(None),
            Product.current_stock > Product.max_quantity
        ).order_by(Product.current_stock.desc()).all()
        
        return {"low_stock": low_stock, "high_stock": high_stock}
    
    @staticmethod
    def generate_stock_transactions_report(db: Session, date_from: datetime, date_to: datetime) -> dict:
        """Movement summary and the ten most active products for a period"""
        if date_from > date_to:
            raise InvalidArgumentError("Start date must be before end date")
        
        movements = db.query(InventoryMovement).filter(
            InventoryMovement.movement_date >= date_from,
            InventoryMovement.movement_date <= date_to
        ).order_by(InventoryMovement.movement_date.asc()).all()
        
        entries = [m for m in movements if m.movement_type == MovementType.ENTRY.value]
        exits = [m for m in movements if m.movement_type == MovementType.EXIT.value]
        
        summary = {
            "total_movements": len(movements),
            "entries_count": len(entries),
            "exits_count": len(exits),
            "total_items_received": sum(m.quantity for m in entries),
            "total_items_removed": sum(m.quantity for m in exits),
            "period_start": date_from,
            "period_end": date_to,
        }
        
        per_product = {}
        for m in movements:
            stats = per_product.setdefault(m.product_id, {
                "product_id": m.product_id,
                "product_name": m.product.name,
                "entries_count": 0,
                "exits_count": 0,
                "total_entry_quantity": 0,
                "total_exit_quantity": 0,
            })
            if m.movement_type == MovementType.ENTRY.value:
                stats["entries_count"] += 1
                stats["total_entry_quantity"] += m.quantity
            else:
                stats["exits_count"] += 1
                stats["total_exit_quantity"] += m.quantity
        
        top_products = sorted(
            per_product.values(),
            key=lambda s: s["entries_count"] + s["exits_count"],
            reverse=True
        )[:10]
        
        return {"summary": summary, "top_products": top_products, "movements": movements}
