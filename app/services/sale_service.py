"""
Sale Service - Sale creation and cancellation against the stock ledger
"""
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core import transaction
from app.core.exceptions import NotFoundError, InvalidArgumentError, InsufficientStockError, ConflictError
from app.models import Sale, SaleDetail, Client, Product, MovementType, MovementReason
from app.schemas.sale import SaleCreate, SaleUpdate
from .movement_service import MovementService
from .price_service import PriceService
from .stock_service import StockService

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

class SaleService:
    """
    Sale business logic
    
    A sale is validated in full before anything is written. The sale, its
    lines, the EXIT movements and the stock decrements then commit as one
    unit. Cancelling writes compensating ENTRY movements and removes the sale.
    """
    
    @staticmethod
    def line_subtotal(unit_price: Decimal, quantity: int, discount_amount: Decimal) -> Decimal:
        subtotal = Decimal(unit_price) * quantity - Decimal(discount_amount or 0)
        return subtotal.quantize(CENTS, rounding=ROUND_HALF_UP)
    
    @staticmethod
    def _check_stock(product: Product, requested: int) -> None:
        if product.current_stock < requested:
            logger.warning(
                f"Sale rejected: {product.sku} has {product.current_stock}, {requested} requested"
            )
            raise InsufficientStockError(product.id, product.name, product.current_stock, requested)
    
    @staticmethod
    def create_sale(db: Session, sale_data: SaleCreate, user_id: Optional[UUID] = None) -> Sale:
        """Create a sale with its lines, EXIT movements and stock decrements"""
        if not db.get(Client, sale_data.client_id):
            raise NotFoundError("Client", sale_data.client_id)
        
        MovementService.check_user(db, user_id)
        
        # Validate every line before writing anything
        requested: Dict[UUID, int] = {}
        lines = []
        total_amount = Decimal("0")
        
        for detail in sale_data.details:
            product = db.get(Product, detail.product_id)
            if not product:
                raise NotFoundError("Product", detail.product_id)
            
            # Lines for the same product draw on the same stock
            requested[product.id] = requested.get(product.id, 0) + detail.quantity
            SaleService._check_stock(product, requested[product.id])
            
            unit_price = detail.unit_price
            if unit_price is None:
                unit_price = PriceService.get_current_price(db, product.id).selling_price
            
            subtotal = SaleService.line_subtotal(unit_price, detail.quantity, detail.discount_amount)
            if subtotal < 0:
                raise InvalidArgumentError(
                    f"Discount {detail.discount_amount} exceeds the line amount for product {product.name}"
                )
            
            total_amount += subtotal
            lines.append((detail, unit_price, subtotal))
        
        with transaction(db):
            # Stable lock order; stock is re-read under the lock
            for product_id in sorted(requested, key=str):
                product = StockService.lock_product(db, product_id)
                SaleService._check_stock(product, requested[product_id])
            
            sale = Sale(
                client_id=sale_data.client_id,
                user_id=user_id,
                sale_date=sale_data.sale_date or datetime.now(),
                total_amount=total_amount,
                notes=sale_data.notes
            )
            for detail, unit_price, subtotal in lines:
                sale.details.append(SaleDetail(
                    product_id=detail.product_id,
                    quantity=detail.quantity,
                    unit_price=unit_price,
                    discount_amount=detail.discount_amount,
                    subtotal=subtotal
                ))
            db.add(sale)
            db.flush()
            new_sale_id = sale.id
            
            try:
                for line in sale.details:
                    MovementService.append_movement(
                        db,
                        product_id=line.product_id,
                        movement_type=MovementType.EXIT,
                        quantity=line.quantity,
                        user_id=user_id,
                        sale_id=sale.id,
                        reference_type="SALE",
                        reference_id=str(sale.id),
                        reason=MovementReason.SALE
                    )
            except IntegrityError as e:
                raise ConflictError(f"Stock changed while sale {sale.id} was being recorded") from e
        
        logger.info(f"Sale {new_sale_id} created: {len(lines)} line(s), total {total_amount}")
        return SaleService.get_sale(db, new_sale_id)
    
    @staticmethod
    def get_sale(db: Session, sale_id: UUID) -> Sale:
        sale = db.query(Sale)\
            .options(selectinload(Sale.details))\
            .filter(Sale.id == sale_id)\
            .first()
        if not sale:
            raise NotFoundError("Sale", sale_id)
        return sale
    
    @staticmethod
    def get_sales(
        db: Session,
        client_id: Optional[UUID] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        page: int = 1,
        per_page: int = 10
    ) -> Tuple[List[Sale], int]:
        """Get sales with filters and pagination, newest first"""
        query = db.query(Sale).options(selectinload(Sale.details))
        
        if client_id:
            query = query.filter(Sale.client_id == client_id)
        
        if date_from:
            query = query.filter(Sale.sale_date >= date_from)
        
        if date_to:
            query = query.filter(Sale.sale_date <= date_to)
        
        total = query.count()
        
        sales = query.order_by(Sale.sale_date.desc())\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()
        
        return sales, total
    
    @staticmethod
    def update_sale(db: Session, sale_id: UUID, sale_data: SaleUpdate) -> Sale:
        """Update header fields. Stock, movements and totals are untouched."""
        sale = SaleService.get_sale(db, sale_id)
        changes = sale_data.model_dump(exclude_unset=True)
        
        if changes.get("client_id") and not db.get(Client, changes["client_id"]):
            raise NotFoundError("Client", changes["client_id"])
        
        with transaction(db):
            for field, value in changes.items():
                if value is not None:
                    setattr(sale, field, value)
        
        logger.info(f"Sale {sale_id} updated")
        return SaleService.get_sale(db, sale_id)
    
    @staticmethod
    def remove_sale(db: Session, sale_id: UUID, user_id: Optional[UUID] = None) -> None:
        """Cancel a sale: give the stock back through ENTRY movements, then delete it"""
        SaleService.get_sale(db, sale_id)
        MovementService.check_user(db, user_id)
        
        with transaction(db):
            # A concurrent cancel may have removed it while we waited
            sale = db.query(Sale)\
                .options(selectinload(Sale.details))\
                .filter(Sale.id == sale_id)\
                .populate_existing()\
                .with_for_update()\
                .first()
            if not sale:
                raise NotFoundError("Sale", sale_id)
            
            actor_id = user_id or sale.user_id
            line_count = len(sale.details)
            for line in sale.details:
                MovementService.append_movement(
                    db,
                    product_id=line.product_id,
                    movement_type=MovementType.ENTRY,
                    quantity=line.quantity,
                    user_id=actor_id,
                    sale_id=sale.id,
                    reference_type="SALE",
                    reference_id=str(sale.id),
                    reason=MovementReason.SALE_CANCELLATION
                )
            db.delete(sale)
        
        logger.info(f"Sale {sale_id} cancelled, stock restored for {line_count} line(s)")
