"""
PEAR Store Application

Phone storefront backend: catalog, session carts with retail and wholesale
pricing, checkout and simulated order-status tracking.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
load_dotenv()

from .core.config import settings
from .dependencies import shutdown_services, start_session_cleanup
from .routes import orders_router, products_router, sessions_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")
    logger.info(f"Message provider: {settings.message_provider}")
    logger.info(f"Text generation: {'enabled' if settings.llm_configured else 'disabled'}")
    start_session_cleanup(settings)
    yield
    logger.info(f"{settings.app_name} shutting down...")
    await shutdown_services()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Phone storefront with retail/wholesale pricing and order tracking",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(products_router)
app.include_router(sessions_router)
app.include_router(orders_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "phones": "/api/phones",
            "sessions": "/api/sessions",
            "orders": "/api/orders",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "pear-store",
        "message_provider": settings.message_provider,
        "text_generation": settings.llm_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pear_store.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
