"""
Dashboard Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foodshare.api.dependencies import get_business_id
from foodshare.config.database import get_db
from foodshare.schemas.dashboard import ImpactSummary
from foodshare.services.dashboard.dashboard_service import DashboardService

router = APIRouter()


@router.get("/impact", response_model=ImpactSummary)
async def get_impact(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Donation counts, units saved and estimated beneficiaries"""
    return DashboardService.impact_summary(db, business_id)
