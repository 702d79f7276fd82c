# Pydantic Schemas Package
from .product import ProductCreate, ProductResponse, StockAdjustment, StockAdjustmentType, ToggleActive
from .price import PriceCreate, PriceUpdate, PriceResponse
from .stock import MovementCreate, MovementUpdate, MovementResponse
from .sale import SaleCreate, SaleUpdate, SaleDetailCreate, SaleResponse, SaleDetailResponse

__all__ = [
    "ProductCreate", "ProductResponse", "StockAdjustment", "StockAdjustmentType", "ToggleActive",
    "PriceCreate", "PriceUpdate", "PriceResponse",
    "MovementCreate", "MovementUpdate", "MovementResponse",
    "SaleCreate", "SaleUpdate", "SaleDetailCreate", "SaleResponse", "SaleDetailResponse",
]
