"""Unit price resolution for retail and wholesale orders"""

from decimal import Decimal

from ..models.cart import OrderMode
from ..models.product import Product


def price(product: Product, mode: OrderMode) -> Decimal:
    """Return the unit price of ``product`` in ``mode``"""
    if mode == OrderMode.WHOLESALE:
        return product.wholesale_price
    return product.retail_price


def line_total(product: Product, quantity: int, mode: OrderMode) -> Decimal:
    return price(product, mode) * quantity
