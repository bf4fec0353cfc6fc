# Store services

from .pricing import price, line_total
from .cart_ledger import CartLedger
from .order_factory import OrderFactory
from .message_provider import (
    MessageProvider,
    TemplateMessageProvider,
    LLMMessageProvider,
    build_message_provider,
)
from .status_engine import StatusProgressionEngine

__all__ = [
    "price",
    "line_total",
    "CartLedger",
    "OrderFactory",
    "MessageProvider",
    "TemplateMessageProvider",
    "LLMMessageProvider",
    "build_message_provider",
    "StatusProgressionEngine",
]
