"""
Donation Routes
Publish, edit and cancel donations; active / completed views
"""
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Path, Response
from sqlalchemy.orm import Session
import logging

from foodshare.api.dependencies import get_business_id
from foodshare.config.database import get_db
from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.schemas.donation import DonationCreate, DonationUpdate, DonationResponse, DonationStatus
from foodshare.services.dashboard.dashboard_service import DashboardService
from foodshare.services.donation.donation_service import DonationService, donation_to_response

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[DonationResponse])
async def list_donations(
    status: Optional[DonationStatus] = Query(None, description="Filter by stored status (active, paused, completed)"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        if status is not None:
            donations = DashboardService.donations_with_status(db, business_id, status)
        else:
            donations = DonationService.list_donations(db, business_id)
        now = datetime.now(timezone.utc)
        return [donation_to_response(d, now) for d in donations]
    except Exception as e:
        logger.error(f"Error listing donations: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch donations")


@router.get("/active", response_model=List[DonationResponse])
async def list_active_donations(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    now = datetime.now(timezone.utc)
    return [donation_to_response(d, now) for d in DashboardService.active_donations(db, business_id)]


@router.get("/completed", response_model=List[DonationResponse])
async def list_completed_donations(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    now = datetime.now(timezone.utc)
    return [donation_to_response(d, now) for d in DashboardService.completed_donations(db, business_id)]


@router.get("/{donation_id}", response_model=DonationResponse)
async def get_donation(
    donation_id: str = Path(..., description="The donation ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    donation = DonationService.get_donation(db, business_id, donation_id)
    if not donation:
        raise HTTPException(status_code=404, detail="Donation not found")
    return donation_to_response(donation)


@router.post("", response_model=DonationResponse, status_code=201)
async def create_donation(
    payload: DonationCreate,
    fiscal_policy: Optional[str] = Query(None, description="full_value or tax_benefit; defaults to DEFAULT_FISCAL_POLICY"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """
    Publish a donation.

    The fiscal value is computed from the product's unit price and the
    quantity, using the requested fiscal policy.
    """
    try:
        donation = DonationService.create_donation(db, business_id, payload, fiscal_policy=fiscal_policy)
        return donation_to_response(donation)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid donation data")
    except Exception as e:
        logger.error(f"Error creating donation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create donation")


@router.patch("/{donation_id}", response_model=DonationResponse)
async def update_donation(
    updates: DonationUpdate,
    donation_id: str = Path(..., description="The donation ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        donation = DonationService.update_donation(db, business_id, donation_id, updates)
        return donation_to_response(donation)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Donation not found")
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid donation data")
    except Exception as e:
        logger.error(f"Error updating donation {donation_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update donation")


@router.delete("/{donation_id}", status_code=204)
async def delete_donation(
    donation_id: str = Path(..., description="The donation ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        deleted = DonationService.delete_donation(db, business_id, donation_id)
    except Exception as e:
        logger.error(f"Error deleting donation {donation_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete donation")

    if not deleted:
        raise HTTPException(status_code=404, detail="Donation not found")
    return Response(status_code=204)
