"""
Business Routes
Read and edit the donor business resolved for the request
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from foodshare.api.dependencies import get_business_id
from foodshare.config.database import get_db
from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.schemas.business import BusinessUpdateRequest, BusinessResponse
from foodshare.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=BusinessResponse)
async def get_business(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Get the business information"""
    business = BusinessService.get_business(db, business_id)
    if not business:
        raise HTTPException(status_code=404, detail="Business not found")
    return business


@router.patch("", response_model=BusinessResponse)
async def update_business(
    updates: BusinessUpdateRequest,
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """
    Update business information.
    Only the fields sent are changed.
    """
    try:
        return BusinessService.update_business(db, business_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Business not found")
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid business data")
    except Exception as e:
        logger.error(f"Error updating business {business_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update business")
