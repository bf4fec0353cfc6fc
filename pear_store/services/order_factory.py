"""Order creation from a cart"""

import itertools
import logging
from datetime import datetime
from typing import Callable

from ..core.clock import utcnow
from ..core.errors import EmptyCartError
from ..models.cart import OrderMode
from ..models.order import DeliveryOption, Order
from .cart_ledger import CartLedger

logger = logging.getLogger(__name__)

# Shared by every factory so ids stay unique within the process even when
# two orders are created in the same millisecond.
_order_sequence = itertools.count(1)


class OrderFactory:
    """Snapshots a cart into an immutable Order"""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock

    def next_order_id(self, created_at: datetime) -> str:
        return f"ORD-{int(created_at.timestamp() * 1000)}-{next(_order_sequence)}"

    def place_order(
        self,
        cart: CartLedger,
        mode: OrderMode,
        delivery_option: DeliveryOption,
    ) -> Order:
        """
        Create an order from the cart's current contents.

        The order holds deep copies of the cart lines and a total priced in
        ``mode`` at this instant; later cart changes do not reach it.

        Raises:
            EmptyCartError: the cart has no lines
        """
        if cart.is_empty:
            raise EmptyCartError()

        created_at = self._clock()
        order = Order(
            order_id=self.next_order_id(created_at),
            items=tuple(cart.snapshot()),
            order_mode=mode,
            delivery_option=delivery_option,
            total=cart.total(mode),
            created_at=created_at,
        )

        logger.info(
            f"Order {order.order_id} created: {len(order.items)} line(s), "
            f"${order.total} {mode.value}, {delivery_option.value}"
        )
        return order
