"""
Typed errors raised by the services.

Every error has a machine-readable `code` and the HTTP `status_code` the API
layer answers with. Callers catch by type, never by message.

    BackOfficeError
    +-- NotFoundError            404  NOT_FOUND
    +-- InvalidArgumentError     400  INVALID_ARGUMENT
    +-- InsufficientStockError   400  INSUFFICIENT_STOCK
    +-- ConflictError            409  CONFLICT
"""
from typing import Any, Optional


class BackOfficeError(Exception):
    """Base error for the back office services"""

    code: str = "BACK_OFFICE_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(BackOfficeError):
    """Referenced entity does not exist"""

    code: str = "NOT_FOUND"
    status_code: int = 404

    def __init__(self, entity: str, entity_id: Any = None, message: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} with ID {entity_id} not found")


class InvalidArgumentError(BackOfficeError):
    """Structurally disallowed request"""

    code: str = "INVALID_ARGUMENT"
    status_code: int = 400


class InsufficientStockError(BackOfficeError):
    """Requested quantity exceeds the stock on hand"""

    code: str = "INSUFFICIENT_STOCK"
    status_code: int = 400

    def __init__(self, product_id: Any, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough stock for product {product_name}. Available: {available}"
        )


class ConflictError(BackOfficeError):
    """A concurrent transaction invalidated a check made earlier in this one"""

    code: str = "CONFLICT"
    status_code: int = 409
