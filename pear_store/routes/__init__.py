# API Routes

from .products import router as products_router
from .sessions import router as sessions_router
from .orders import router as orders_router

__all__ = ["products_router", "sessions_router", "orders_router"]
