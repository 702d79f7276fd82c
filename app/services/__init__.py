# Services Package
from .stock_service import StockService
from .movement_service import MovementService
from .price_service import PriceService
from .sale_service import SaleService
from .product_service import ProductService
from .toggle_active_service import ToggleActiveService, ActiveEntity

__all__ = [
    "StockService",
    "MovementService",
    "PriceService",
    "SaleService",
    "ProductService",
    "ToggleActiveService",
    "ActiveEntity",
]
