# Store Models

from .product import Product, ProductSort, CreateProductRequest, StockUpdateRequest
from .cart import (
    CartLine,
    OrderMode,
    AddToCartRequest,
    SetQuantityRequest,
    OrderModeRequest,
    CartLineView,
    CartView,
)
from .order import (
    DeliveryOption,
    DeliveryOptionRequest,
    Order,
    OrderStatus,
    OrderTracking,
    SessionView,
    StatusUpdate,
)

__all__ = [
    "Product",
    "ProductSort",
    "CreateProductRequest",
    "StockUpdateRequest",
    "CartLine",
    "OrderMode",
    "AddToCartRequest",
    "SetQuantityRequest",
    "OrderModeRequest",
    "CartLineView",
    "CartView",
    "DeliveryOption",
    "DeliveryOptionRequest",
    "Order",
    "OrderStatus",
    "OrderTracking",
    "SessionView",
    "StatusUpdate",
]
