"""
Service wiring for the API routes.

Stores and services are process-wide singletons created on first use and
handed to routes through FastAPI dependencies, so tests can swap any of
them with ``app.dependency_overrides``.
"""

import asyncio
import logging
import random
from typing import Optional

from fastapi import Depends

from .core.config import Settings, get_settings
from .core.session import SessionManager
from .database.orders import OrderDatabase, order_db
from .database.products import ProductDatabase, product_db
from .services.checkout import Checkout
from .services.message_provider import MessageProvider, build_message_provider
from .services.order_factory import OrderFactory
from .services.status_engine import StatusProgressionEngine

logger = logging.getLogger(__name__)

session_manager = SessionManager(product_lookup=product_db.get_product)
order_factory = OrderFactory()

message_provider: Optional[MessageProvider] = None
status_engine: Optional[StatusProgressionEngine] = None
cleanup_task: Optional[asyncio.Task] = None


def get_product_db() -> ProductDatabase:
    return product_db


def get_order_db() -> OrderDatabase:
    return order_db


def get_session_manager() -> SessionManager:
    return session_manager


def get_message_provider(settings: Settings = Depends(get_settings)) -> MessageProvider:
    """Get or create the configured message provider"""
    global message_provider
    if message_provider is None:
        message_provider = build_message_provider(settings)
        logger.info(f"Message provider: {type(message_provider).__name__}")
    return message_provider


def get_status_engine(
    settings: Settings = Depends(get_settings),
    provider: MessageProvider = Depends(get_message_provider),
) -> StatusProgressionEngine:
    """Get or create the status progression engine"""
    global status_engine
    if status_engine is None:
        status_engine = StatusProgressionEngine(
            provider=provider,
            base_delay=settings.status_base_delay_seconds,
            jitter_min=settings.status_jitter_min_seconds,
            jitter_max=settings.status_jitter_max_seconds,
            provider_timeout=settings.provider_timeout_seconds,
            rng=random.Random(),
        )
    return status_engine


def get_checkout(
    engine: StatusProgressionEngine = Depends(get_status_engine),
    orders: OrderDatabase = Depends(get_order_db),
) -> Checkout:
    return Checkout(factory=order_factory, engine=engine, order_db=orders)


def start_session_cleanup(settings: Settings) -> None:
    """Start the background sweep of idle sessions"""
    global cleanup_task
    if cleanup_task is None or cleanup_task.done():
        cleanup_task = asyncio.create_task(
            session_manager.cleanup_periodically(
                settings.session_cleanup_interval_seconds,
                settings.session_max_age_hours,
            ),
            name="session-cleanup",
        )


async def shutdown_services() -> None:
    """Stop background work and close the provider"""
    global cleanup_task
    if cleanup_task is not None:
        cleanup_task.cancel()
        try:
            await cleanup_task
        except asyncio.CancelledError:
            pass
        cleanup_task = None

    cancelled = await session_manager.cancel_all()
    if cancelled:
        logger.info(f"Cancelled {cancelled} running order progression(s)")
    if message_provider is not None:
        await message_provider.close()
