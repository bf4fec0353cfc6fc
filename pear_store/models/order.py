"""Order and order-tracking models"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .cart import CartLine, CartView, OrderMode


class DeliveryOption(str, Enum):
    STANDARD = "Standard Shipping"
    EXPRESS = "Express Shipping"
    PICKUP = "In-Store Pickup"


class OrderStatus(str, Enum):
    """Fulfillment statuses, in the order an order passes through them"""
    PLACED = "Order Placed"
    PROCESSING = "Processing"
    PACKAGED = "Packaged"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"

    @property
    def is_terminal(self) -> bool:
        return self is OrderStatus.DELIVERED


class Order(BaseModel):
    """Immutable record of a placed order"""

    model_config = ConfigDict(frozen=True)

    order_id: str
    items: tuple[CartLine, ...]
    order_mode: OrderMode
    delivery_option: DeliveryOption
    total: Decimal
    created_at: datetime


class StatusUpdate(BaseModel):
    """One step of an order's fulfillment timeline"""

    model_config = ConfigDict(frozen=True)

    status: OrderStatus
    message: str
    timestamp: datetime


class DeliveryOptionRequest(BaseModel):
    delivery_option: DeliveryOption


class OrderTracking(BaseModel):
    """Order together with the updates reached so far"""
    order: Order
    updates: list[StatusUpdate]
    current_status: OrderStatus
    is_complete: bool

    @classmethod
    def build(cls, order: Order, updates: list[StatusUpdate]) -> "OrderTracking":
        # Copy first; the progression task may append while we read.
        updates = list(updates)
        current = updates[-1].status if updates else OrderStatus.PLACED
        return cls(
            order=order,
            updates=updates,
            current_status=current,
            is_complete=current.is_terminal,
        )


class SessionView(BaseModel):
    """Everything the storefront needs to render one shopper's state"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartView
    delivery_option: DeliveryOption
    order: Optional[OrderTracking] = None
