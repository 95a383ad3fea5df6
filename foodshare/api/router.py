"""
API router setup
One router per entity, all scoped to the business resolved from X-Business-ID
"""
from fastapi import APIRouter

from foodshare.api.routes import business, products, donations, schedule, closures, dashboard

api_router = APIRouter()

api_router.include_router(
    business.router,
    prefix="/business",
    tags=["Business"]
)

api_router.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

api_router.include_router(
    donations.router,
    prefix="/donations",
    tags=["Donations"]
)

api_router.include_router(
    schedule.router,
    prefix="/schedule",
    tags=["Schedule"]
)

api_router.include_router(
    closures.router,
    prefix="/closures",
    tags=["Closures"]
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)


@api_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available resources.
    """
    return {
        "version": "1.0",
        "tenant_header": "X-Business-ID (defaults to the demo business)",
        "resources": ["business", "products", "donations", "schedule", "closures", "dashboard"]
    }
