"""
Price Service - Price history with a single current price per product
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from app.core import transaction
from app.core.exceptions import NotFoundError, InvalidArgumentError
from app.models import Price, Product
from app.schemas.price import PriceCreate, PriceUpdate
from .stock_service import StockService

logger = logging.getLogger(__name__)

class PriceService:
    """Price business logic"""
    
    @staticmethod
    def _check_positive(**amounts: Optional[Decimal]) -> None:
        for field, amount in amounts.items():
            if amount is not None and amount <= 0:
                raise InvalidArgumentError(f"{field} must be positive")
    
    @staticmethod
    def _demote_current(db: Session, product_id: UUID, exclude_price_id: Optional[UUID] = None) -> int:
        """Clear the current flag on the product's prices and close their validity"""
        query = db.query(Price).filter(
            Price.product_id == product_id,
            Price.is_current_price == True
        )
        if exclude_price_id:
            query = query.filter(Price.id != exclude_price_id)
        
        return query.update(
            {Price.is_current_price: False, Price.valid_to: datetime.now()},
            synchronize_session=False
        )
    
    @staticmethod
    def create_price(db: Session, price_data: PriceCreate) -> Price:
        """Create a price, demoting the previous current one when this one is current"""
        if not db.get(Product, price_data.product_id):
            raise NotFoundError("Product", price_data.product_id)
        
        PriceService._check_positive(
            purchase_price=price_data.purchase_price,
            selling_price=price_data.selling_price
        )
        
        with transaction(db):
            # Serializes writers of this product's current price
            StockService.lock_product(db, price_data.product_id)
            
            if price_data.is_current_price:
                demoted = PriceService._demote_current(db, price_data.product_id)
                if demoted:
                    logger.info(f"Demoted {demoted} current price(s) of product {price_data.product_id}")
            
            price = Price(
                product_id=price_data.product_id,
                purchase_price=price_data.purchase_price,
                selling_price=price_data.selling_price,
                is_current_price=price_data.is_current_price,
                valid_from=datetime.now()
            )
            db.add(price)
            db.flush()
        
        db.refresh(price)
        logger.info(f"Price {price.id} created for product {price.product_id}")
        return price
    
    @staticmethod
    def get_price(db: Session, price_id: UUID) -> Price:
        price = db.query(Price).filter(Price.id == price_id).first()
        if not price:
            raise NotFoundError("Price", price_id)
        return price
    
    @staticmethod
    def get_prices(
        db: Session,
        product_id: Optional[UUID] = None,
        is_current_price: Optional[bool] = None,
        page: int = 1,
        per_page: int = 10
    ) -> Tuple[List[Price], int]:
        """Get prices with filters and pagination"""
        query = db.query(Price)
        
        if product_id:
            query = query.filter(Price.product_id == product_id)
        
        if is_current_price is not None:
            query = query.filter(Price.is_current_price == is_current_price)
        
        total = query.count()
        
        prices = query.order_by(Price.valid_from.desc())\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()
        
        return prices, total
    
    @staticmethod
    def get_current_price(db: Session, product_id: UUID) -> Price:
        if not db.get(Product, product_id):
            raise NotFoundError("Product", product_id)
        
        price = db.query(Price).filter(
            Price.product_id == product_id,
            Price.is_current_price == True
        ).first()
        
        if not price:
            raise NotFoundError(
                "Price", message=f"No current price found for product with ID {product_id}"
            )
        return price
    
    @staticmethod
    def update_price(db: Session, price_id: UUID, price_data: PriceUpdate) -> Price:
        """
        Update amounts and/or the current flag.
        
        Setting is_current_price demotes the product's other current price in
        the same transaction; clearing it closes this price's validity.
        """
        price = PriceService.get_price(db, price_id)
        changes = price_data.model_dump(exclude_unset=True)
        
        for field in ("purchase_price", "selling_price"):
            if field in changes and changes[field] is None:
                raise InvalidArgumentError(f"{field} cannot be cleared")
        
        PriceService._check_positive(
            purchase_price=changes.get("purchase_price"),
            selling_price=changes.get("selling_price")
        )
        
        with transaction(db):
            StockService.lock_product(db, price.product_id)
            # Flag may have moved while we waited for the lock
            price = db.query(Price).filter(Price.id == price_id).populate_existing().one()
            make_current = changes.pop("is_current_price", None)
            
            if make_current and not price.is_current_price:
                PriceService._demote_current(db, price.product_id, exclude_price_id=price.id)
                price.is_current_price = True
                price.valid_to = None
                logger.info(f"Price {price.id} is now current for product {price.product_id}")
            elif make_current is False and price.is_current_price:
                price.is_current_price = False
                price.valid_to = datetime.now()
            
            for field, value in changes.items():
                setattr(price, field, value)
            db.flush()
        
        logger.info(f"Price {price_id} updated")
        db.refresh(price)
        return price
    
    @staticmethod
    def promote(db: Session, price_id: UUID) -> Price:
        """Make a price the product's current one"""
        return PriceService.update_price(db, price_id, PriceUpdate(is_current_price=True))
    
    @staticmethod
    def retire(db: Session, price_id: UUID) -> None:
        """Delete a price that is not current"""
        price = PriceService.get_price(db, price_id)
        
        if price.is_current_price:
            raise InvalidArgumentError(
                "Cannot delete the current price. Create a new price or promote another price first."
            )
        
        with transaction(db):
            db.delete(price)
        logger.info(f"Price {price_id} deleted")
