"""
FastAPI application for the food-donation backend

Thin HTTP layer - all rules live in the services
"""
import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from contextlib import asynccontextmanager

from foodshare.config.database import SessionLocal, create_tables
from foodshare.config.settings import get_settings
from foodshare.core.exception_handlers import register_exception_handlers
from foodshare.core.middleware import correlation_id_middleware, request_logging_middleware
from foodshare.core.monitoring import health_router
from foodshare.api.router import api_router
from foodshare.services.demo.seed_service import DemoSeedService
from foodshare.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


def seed_demo_data():
    db = SessionLocal()
    try:
        DemoSeedService.seed(db, settings.DEFAULT_BUSINESS_ID)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_logging()
    create_tables()
    if settings.SEED_DEMO_DATA:
        seed_demo_data()

    logger.info(f"🚀 {settings.APP_NAME} starting up...")
    logger.info(f"🔧 API available at {settings.API_PREFIX}/")
    logger.info("❤️  Health check at /health")

    routes_list = sorted(
        (method, route.path)
        for route in app.routes
        if isinstance(route, APIRoute)
        for method in route.methods
    )
    for method, path in routes_list:
        logger.debug(f"  {method:8} {path}")
    logger.info(f"✅ Total routes registered: {len(routes_list)}")

    yield

    # Shutdown
    logger.info(f"🛑 {settings.APP_NAME} shutting down...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Foodshare Donation API",
        description="Surplus product donations, weekly collection schedules and closures",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "api": f"{settings.API_PREFIX}/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "foodshare.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
