"""
Order Status Progression

Timed state machine that walks a placed order from Placed to Delivered,
appending one StatusUpdate per step as soon as it is reached.
"""

import asyncio
import logging
import random
from datetime import datetime
from typing import Awaitable, Callable, Optional

from ..core.clock import utcnow
from ..models.order import Order, OrderStatus, StatusUpdate
from .message_provider import MessageProvider, fallback_status_message

logger = logging.getLogger(__name__)

PLACED_MESSAGE = (
    "Your order #{order_id} has been successfully placed. "
    "We're getting it ready for you."
)

# Statuses reached after Placed, in order.
PROGRESSION: tuple[OrderStatus, ...] = tuple(
    status for status in OrderStatus if status is not OrderStatus.PLACED
)

StatusListener = Callable[[StatusUpdate], None]
Sleep = Callable[[float], Awaitable[None]]


class StatusProgressionEngine:
    """
    Drives orders through the fulfillment statuses.

    The first transition waits ``base_delay`` seconds. Each later one waits
    the previous delay plus a jitter drawn uniformly from
    ``[jitter_min, jitter_max)``, so milestones spread further apart as the
    order advances. A failing message provider never stops the sequence;
    the step gets a fallback message instead.

    Sleep, clock and random source are injectable so the schedule can be
    driven without waiting on the wall clock.
    """

    def __init__(
        self,
        provider: MessageProvider,
        base_delay: float = 3.0,
        jitter_min: float = 2.0,
        jitter_max: float = 4.0,
        provider_timeout: Optional[float] = 10.0,
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = utcnow,
    ):
        if base_delay < 0 or jitter_min < 0:
            raise ValueError("Delays must be non-negative")
        if jitter_max < jitter_min:
            raise ValueError("jitter_max must not be below jitter_min")

        self.provider = provider
        self.base_delay = base_delay
        self.jitter_min = jitter_min
        self.jitter_max = jitter_max
        self.provider_timeout = provider_timeout
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._clock = clock

    def _jitter(self) -> float:
        return self.jitter_min + self._rng.random() * (self.jitter_max - self.jitter_min)

    def delay_schedule(self) -> list[float]:
        """Draw the delays preceding each status in PROGRESSION"""
        delays = [self.base_delay]
        for _ in PROGRESSION[1:]:
            delays.append(delays[-1] + self._jitter())
        return delays

    def initial_update(self, order: Order) -> StatusUpdate:
        """Placed update, built without consulting the provider"""
        return StatusUpdate(
            status=OrderStatus.PLACED,
            message=PLACED_MESSAGE.format(order_id=order.order_id),
            timestamp=order.created_at,
        )

    async def _message_for(self, status: OrderStatus) -> str:
        try:
            if self.provider_timeout is None:
                message = await self.provider.status_message(status)
            else:
                message = await asyncio.wait_for(
                    self.provider.status_message(status),
                    timeout=self.provider_timeout,
                )
        except Exception as e:
            logger.warning(f"Message provider failed for {status.value}, using fallback: {e!r}")
            return fallback_status_message(status)

        if not message or not message.strip():
            logger.warning(f"Message provider returned no text for {status.value}, using fallback")
            return fallback_status_message(status)
        return message.strip()

    async def run(
        self,
        order: Order,
        updates: list[StatusUpdate],
        listener: Optional[StatusListener] = None,
    ) -> list[StatusUpdate]:
        """
        Advance ``order`` to Delivered, appending to ``updates`` in place.

        ``updates`` is expected to hold the Placed update; it is added here
        when empty. Each later update is appended (and passed to
        ``listener``) right after its message is obtained.
        """
        if not updates:
            updates.append(self.initial_update(order))
        elif updates[-1].status is not OrderStatus.PLACED:
            raise ValueError(f"Order {order.order_id} has already progressed past Placed")

        for status, delay in zip(PROGRESSION, self.delay_schedule()):
            await self._sleep(delay)
            message = await self._message_for(status)

            # Never let a clock step backwards reorder the timeline.
            timestamp = max(self._clock(), updates[-1].timestamp)
            update = StatusUpdate(status=status, message=message, timestamp=timestamp)
            updates.append(update)
            logger.info(f"Order {order.order_id} is now {status.value}")

            if listener is not None:
                listener(update)

        return updates

    def start(
        self,
        order: Order,
        updates: list[StatusUpdate],
        listener: Optional[StatusListener] = None,
    ) -> asyncio.Task:
        """Schedule ``run`` on the running loop; the task is the cancel handle"""
        task = asyncio.create_task(
            self.run(order, updates, listener),
            name=f"order-progress-{order.order_id}",
        )
        task.add_done_callback(_log_task_failure)
        return task


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Progression task {task.get_name()} failed: {exc!r}", exc_info=exc)
