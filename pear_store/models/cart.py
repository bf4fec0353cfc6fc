"""Cart models"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .product import Product


class OrderMode(str, Enum):
    """Selects which of a product's two prices is active"""
    RETAIL = "Retail"
    WHOLESALE = "Wholesale"


class CartLine(BaseModel):
    """Product and quantity held in a cart"""

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(gt=0)


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: int
    quantity: int = Field(default=1, gt=0)


class SetQuantityRequest(BaseModel):
    """Request to set a cart line's quantity; zero or less removes it"""
    quantity: int


class OrderModeRequest(BaseModel):
    mode: OrderMode


class CartLineView(BaseModel):
    """Cart line priced in the session's current order mode"""
    product: Product
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class CartView(BaseModel):
    """Cart contents and total in one order mode"""
    order_mode: OrderMode
    lines: list[CartLineView] = []
    item_count: int = 0
    total: Decimal = Decimal("0.00")
