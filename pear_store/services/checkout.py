"""Checkout: places orders for a session and starts their tracking"""

import logging

from ..core.errors import OrderInProgressError
from ..core.session import StoreSession
from ..database.orders import OrderDatabase
from ..models.order import Order
from .order_factory import OrderFactory
from .status_engine import StatusProgressionEngine

logger = logging.getLogger(__name__)


class Checkout:
    """Ties the order factory, the status engine and the order registry to a session"""

    def __init__(
        self,
        factory: OrderFactory,
        engine: StatusProgressionEngine,
        order_db: OrderDatabase,
    ):
        self.factory = factory
        self.engine = engine
        self.order_db = order_db

    def place_order(self, session: StoreSession) -> Order:
        """
        Place an order from the session's cart and start its progression.

        Must be called from a running event loop. The Placed update is in
        the session's timeline when this returns; the remaining statuses
        arrive from the background task stored on the session.

        Raises:
            OrderInProgressError: the session already has an active order
            EmptyCartError: the cart is empty
        """
        if session.has_active_order:
            raise OrderInProgressError(
                f"Order {session.current_order.order_id} is still active; "
                "start a new order first"
            )

        order = self.factory.place_order(
            session.cart,
            session.order_mode,
            session.delivery_option,
        )

        session.begin_order(order, self.engine.initial_update(order))
        self.order_db.save(order, session.status_updates)
        session.progress_task = self.engine.start(order, session.status_updates)

        logger.info(f"Session {session.session_id}: tracking started for {order.order_id}")
        return order

    async def new_order(self, session: StoreSession) -> None:
        """Cancel any running progression and reset cart and order state"""
        previous = session.current_order
        await session.reset_order()
        if previous is not None:
            logger.info(f"Session {session.session_id}: cleared order {previous.order_id}")
