"""Health checks and store statistics"""
from fastapi import APIRouter, Depends
from sqlalchemy import func, text
from sqlalchemy.orm import Session
import logging

from foodshare.config.database import get_db
from foodshare.config.settings import get_settings
from foodshare.models import Business, Product, Donation, Schedule, Closure

logger = logging.getLogger(__name__)
health_router = APIRouter()

COUNTED_ENTITIES = {
    "businesses": Business,
    "products": Product,
    "donations": Donation,
    "schedules": Schedule,
    "closures": Closure,
}


@health_router.get("/")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": get_settings().APP_NAME}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Store reachability plus how many records each collection holds"""
    settings = get_settings()
    report = {"api": "healthy", "store": "unknown", "counts": {}, "demo_business": None}

    try:
        db.execute(text("SELECT 1"))
        report["counts"] = {
            name: db.query(func.count(model.id)).scalar()
            for name, model in COUNTED_ENTITIES.items()
        }
        report["demo_business"] = db.get(Business, settings.DEFAULT_BUSINESS_ID) is not None
        report["store"] = "healthy"
    except Exception as e:
        logger.error(f"Store health check failed: {e}", exc_info=True)
        report["store"] = "unhealthy"

    report["overall"] = "healthy" if report["store"] == "healthy" else "degraded"
    return report
