"""Cart ledger for a store session"""

import logging
from decimal import Decimal
from typing import Callable, Iterator, Optional

from ..core.errors import NotFoundError, ValidationError
from ..models.cart import CartLine, OrderMode
from ..models.product import Product
from .pricing import line_total

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

ProductLookup = Callable[[int], Optional[Product]]


def _check_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Quantity must be an integer, got {quantity!r}")


class CartLedger:
    """
    In-memory product-to-quantity ledger.

    Holds at most one line per product id, kept in insertion order. Lines
    never carry a quantity below one. Totals are not stored; every call to
    ``total`` prices the current lines in the requested order mode.
    """

    def __init__(self, product_lookup: Optional[ProductLookup] = None):
        """
        Args:
            product_lookup: Resolves a product id to a Product, used when
                ``set_quantity`` targets a product not yet in the cart
        """
        self._lines: dict[int, CartLine] = {}
        self._product_lookup = product_lookup

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._lines

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        """Number of units across all lines"""
        return sum(line.quantity for line in self._lines.values())

    def get(self, product_id: int) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def lines(self) -> list[CartLine]:
        """Lines in insertion order"""
        return list(self._lines.values())

    def add(self, product: Product, quantity: int = 1) -> CartLine:
        """Add units of a product, merging into its existing line"""
        _check_quantity(quantity)
        if quantity <= 0:
            raise ValidationError(f"Quantity to add must be positive, got {quantity}")

        existing = self._lines.get(product.id)
        if existing:
            line = existing.model_copy(update={"quantity": existing.quantity + quantity})
        else:
            line = CartLine(product=product, quantity=quantity)

        self._lines[product.id] = line
        logger.debug(f"Cart add: product {product.id} -> quantity {line.quantity}")
        return line

    def set_quantity(self, product_id: int, quantity: int) -> Optional[CartLine]:
        """
        Replace the quantity of a line.

        A quantity of zero or less removes the line, whether or not it
        exists. A positive quantity for a product not yet in the cart
        inserts a new line, looking the product up by id.

        Returns:
            The resulting line, or None if the line was removed

        Raises:
            NotFoundError: the product is not in the cart and cannot be found
        """
        _check_quantity(quantity)
        if quantity <= 0:
            self.remove(product_id)
            return None

        existing = self._lines.get(product_id)
        if existing:
            line = existing.model_copy(update={"quantity": quantity})
        else:
            product = self._product_lookup(product_id) if self._product_lookup else None
            if product is None:
                raise NotFoundError(f"Product {product_id} not found")
            line = CartLine(product=product, quantity=quantity)

        self._lines[product_id] = line
        return line

    def remove(self, product_id: int) -> bool:
        """Remove a line; returns False if it was not there"""
        return self._lines.pop(product_id, None) is not None

    def clear(self) -> None:
        self._lines.clear()

    def total(self, mode: OrderMode) -> Decimal:
        """Sum of unit price times quantity over all lines, rounded to cents"""
        amount = sum(
            (line_total(line.product, line.quantity, mode) for line in self._lines.values()),
            Decimal("0"),
        )
        return amount.quantize(CENTS)

    def snapshot(self) -> list[CartLine]:
        """Deep copies of the current lines, independent of this ledger"""
        return [line.model_copy(deep=True) for line in self._lines.values()]
