"""Session management for storefront shoppers"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..models.cart import OrderMode
from ..models.order import DeliveryOption, Order, OrderStatus, StatusUpdate
from ..services.cart_ledger import CartLedger, ProductLookup
from .clock import utcnow

logger = logging.getLogger(__name__)


@dataclass
class StoreSession:
    """One shopper's cart, pricing mode and active order"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartLedger = field(default_factory=CartLedger)
    order_mode: OrderMode = OrderMode.RETAIL
    delivery_option: DeliveryOption = DeliveryOption.STANDARD
    current_order: Optional[Order] = None
    status_updates: list[StatusUpdate] = field(default_factory=list)
    progress_task: Optional[asyncio.Task] = None

    def touch(self) -> None:
        self.updated_at = utcnow()

    def set_order_mode(self, mode: OrderMode) -> None:
        """Switch pricing mode; cart quantities are left alone"""
        self.order_mode = mode
        self.touch()

    def set_delivery_option(self, option: DeliveryOption) -> None:
        self.delivery_option = option
        self.touch()

    @property
    def has_active_order(self) -> bool:
        return self.current_order is not None

    @property
    def is_progress_running(self) -> bool:
        return self.progress_task is not None and not self.progress_task.done()

    @property
    def latest_status(self) -> Optional[OrderStatus]:
        if not self.status_updates:
            return None
        return self.status_updates[-1].status

    def begin_order(self, order: Order, initial_update: StatusUpdate) -> None:
        """Make ``order`` active with a fresh timeline starting at Placed"""
        self.current_order = order
        self.status_updates = [initial_update]
        self.progress_task = None
        self.touch()

    async def cancel_progress(self) -> bool:
        """Cancel a running progression and wait for it to stop"""
        task = self.progress_task
        if task is None or task.done():
            return False

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info(f"Session {self.session_id}: progression cancelled")
        return True

    async def reset_order(self) -> None:
        """Start over: stop tracking, drop the order and empty the cart"""
        await self.cancel_progress()
        self.current_order = None
        self.status_updates = []
        self.progress_task = None
        self.cart.clear()
        self.touch()


class SessionManager:
    """Manages shopper sessions"""

    def __init__(self, product_lookup: Optional[ProductLookup] = None):
        self.sessions: dict[str, StoreSession] = {}
        self._product_lookup = product_lookup

    def create_session(self) -> StoreSession:
        """Create a new session"""
        now = utcnow()
        session = StoreSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            cart=CartLedger(product_lookup=self._product_lookup),
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[StoreSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    async def delete_session(self, session_id: str) -> bool:
        """Delete a session, stopping its progression"""
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        await session.cancel_progress()
        return True

    async def cleanup_periodically(
        self,
        interval_seconds: float,
        max_age_hours: float = 24,
        sleep=asyncio.sleep,
    ) -> None:
        """Drop idle sessions every ``interval_seconds`` until cancelled"""
        while True:
            await sleep(interval_seconds)
            removed = self.cleanup_old_sessions(max_age_hours)
            if removed:
                logger.info(f"Removed {removed} idle session(s)")

    def cleanup_old_sessions(self, max_age_hours: float = 24) -> int:
        """Remove idle sessions older than max_age_hours"""
        now = utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if not session.is_progress_running
            and (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            del self.sessions[sid]
        return len(old_sessions)

    async def cancel_all(self) -> int:
        """Cancel every running progression"""
        cancelled = 0
        for session in list(self.sessions.values()):
            if await session.cancel_progress():
                cancelled += 1
        return cancelled
