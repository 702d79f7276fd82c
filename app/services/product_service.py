"""
Product Service - Business Logic for Products
"""
import logging
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple
from uuid import UUID

from app.core import transaction
from app.core.exceptions import NotFoundError, InvalidArgumentError, InsufficientStockError
from app.models import Product, Supplier, Price, MovementType, MovementReason
from app.schemas.product import ProductCreate, StockAdjustment, StockAdjustmentType
from .movement_service import MovementService
from .stock_service import StockService

logger = logging.getLogger(__name__)

class ProductService:
    """Product business logic"""
    
    @staticmethod
    def get_products(
        db: Session,
        search: Optional[str] = None,
        supplier_id: Optional[UUID] = None,
        active_only: bool = True,
        page: int = 1,
        per_page: int = 10
    ) -> Tuple[List[Product], int]:
        """Get products with filters and pagination"""
        query = db.query(Product)
        
        if active_only:
            query = query.filter(Product.is_active == True)
        
        if supplier_id:
            query = query.filter(Product.supplier_id == supplier_id)
        
        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.sku.ilike(search_term),
                    Product.name.ilike(search_term)
                )
            )
        
        total = query.count()
        
        products = query.order_by(Product.sku)\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()
        
        return products, total
    
    @staticmethod
    def get_product(db: Session, product_id: UUID) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product", product_id)
        return product
    
    @staticmethod
    def create_product(db: Session, product_data: ProductCreate) -> Product:
        """Create a product with zero stock and, when priced, its first current price"""
        if not db.get(Supplier, product_data.supplier_id):
            raise NotFoundError("Supplier", product_data.supplier_id)
        
        priced = (product_data.purchase_price, product_data.selling_price)
        if any(p is not None for p in priced) and not all(p is not None for p in priced):
            raise InvalidArgumentError("Purchase and selling price must be given together")
        
        if product_data.max_quantity is not None and product_data.max_quantity < product_data.min_quantity:
            raise InvalidArgumentError("max_quantity cannot be lower than min_quantity")
        
        with transaction(db):
            product = Product(
                sku=product_data.sku,
                name=product_data.name,
                description=product_data.description,
                supplier_id=product_data.supplier_id,
                current_stock=0,
                min_quantity=product_data.min_quantity,
                max_quantity=product_data.max_quantity
            )
            db.add(product)
            db.flush()
            
            if product_data.purchase_price is not None:
                db.add(Price(
                    product_id=product.id,
                    purchase_price=product_data.purchase_price,
                    selling_price=product_data.selling_price,
                    is_current_price=True,
                    valid_from=datetime.now()
                ))
        
        db.refresh(product)
        logger.info(f"Product {product.sku} created")
        return product
    
    @staticmethod
    def adjust_stock(
        db: Session,
        product_id: UUID,
        adjustment: StockAdjustment,
        user_id: Optional[UUID] = None
    ) -> Product:
        """Manual stock correction, recorded in the ledger like any other movement"""
        ProductService.get_product(db, product_id)
        MovementService.check_user(db, user_id)
        
        increase = adjustment.type == StockAdjustmentType.INCREASE
        
        with transaction(db):
            product = StockService.lock_product(db, product_id)
            if not increase and product.current_stock < adjustment.quantity:
                logger.warning(
                    f"Adjustment of -{adjustment.quantity} refused for {product.sku}: "
                    f"only {product.current_stock} on hand"
                )
                raise InsufficientStockError(
                    product.id, product.name, product.current_stock, adjustment.quantity
                )
            
            MovementService.append_movement(
                db,
                product_id=product_id,
                movement_type=MovementType.ENTRY if increase else MovementType.EXIT,
                quantity=adjustment.quantity,
                user_id=user_id,
                reference_type="ADJUSTMENT",
                reason=adjustment.reason or MovementReason.ADJUSTMENT,
                notes=adjustment.notes
            )
        
        db.refresh(product)
        logger.info(f"Stock of {product.sku} adjusted to {product.current_stock}")
        return product
    
    @staticmethod
    def get_stock_status_report(db: Session) -> dict:
        """Active products split into low / high / optimal stock"""
        products = db.query(Product).filter(Product.is_active == True).order_by(Product.name).all()
        
        purchase_prices = dict(
            db.query(Price.product_id, Price.purchase_price)
            .filter(Price.is_current_price == True)
            .all()
        )
        
        low_stock, high_stock, optimal_stock = [], [], []
        for product in products:
            if product.current_stock < product.min_quantity:
                low_stock.append(product)
            elif product.max_quantity is not None and product.current_stock > product.max_quantity:
                high_stock.append(product)
            else:
                optimal_stock.append(product)
        
        total_products = len(products)
        total_stock = sum(p.current_stock for p in products)
        total_value = sum(
            (Decimal(purchase_prices[p.id]) * p.current_stock for p in products if p.id in purchase_prices),
            Decimal("0")
        )
        
        return {
            "summary": {
                "total_products": total_products,
                "total_stock": total_stock,
                "average_stock": total_stock / total_products if total_products else 0,
                "total_stock_value": total_value,
                "low_stock_count": len(low_stock),
                "high_stock_count": len(high_stock),
                "optimal_stock_count": len(optimal_stock),
            },
            "low_stock": low_stock,
            "high_stock": high_stock,
            "optimal_stock": optimal_stock,
        }
