"""
Stock Service - the only writer of Product.current_stock
"""
from sqlalchemy.orm import Session
from sqlalchemy import update
from uuid import UUID

from app.core.exceptions import NotFoundError
from app.models import Product

class StockService:
    """Stock counter adjustments"""
    
    @staticmethod
    def lock_product(db: Session, product_id: UUID) -> Product:
        """
        Load a product with a row lock held until the caller's transaction ends.
        
        Attributes are re-read from the database so checks made on the returned
        row see whatever concurrent transactions committed before the lock.
        """
        product = db.query(Product)\
            .filter(Product.id == product_id)\
            .populate_existing()\
            .with_for_update()\
            .first()
        
        if not product:
            raise NotFoundError("Product", product_id)
        return product
    
    @staticmethod
    def adjust_stock(db: Session, product_id: UUID, delta: int) -> int:
        """
        Apply a signed delta to the product's stock counter.
        
        Runs inside the caller's transaction and never commits. Callers check
        that consumptive deltas are covered before calling.
        """
        result = db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(current_stock=Product.current_stock + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Product", product_id)
        
        product = db.get(Product, product_id, populate_existing=True)
        return product.current_stock
