from .base import TimestampMixin, UUIDMixin
from .master import AppUser, Supplier
from .customer import Client
from .product import Product
from .price import Price
from .stock import InventoryMovement, MovementType, MovementReason
from .sale import Sale, SaleDetail

__all__ = [
    # Base
    "TimestampMixin", "UUIDMixin",
    # Master
    "AppUser", "Supplier",
    # Customer
    "Client",
    # Product
    "Product",
    # Price
    "Price",
    # Stock
    "InventoryMovement", "MovementType", "MovementReason",
    # Sale
    "Sale", "SaleDetail",
]
