"""
Closure Routes
Exceptional and emergency closures
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.orm import Session
import logging

from foodshare.api.dependencies import get_business_id
from foodshare.config.database import get_db
from foodshare.core.errors import ValidationError
from foodshare.schemas.schedule import ClosureCreate, ClosureResponse
from foodshare.services.schedule.closure_service import ClosureService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[ClosureResponse])
async def list_closures(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    return ClosureService.list_closures(db, business_id)


@router.post("", response_model=ClosureResponse, status_code=201)
async def create_closure(
    payload: ClosureCreate,
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        return ClosureService.create_closure(db, business_id, payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid closure data")
    except Exception as e:
        logger.error(f"Error creating closure: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create closure")


@router.delete("/{closure_id}", status_code=204)
async def delete_closure(
    closure_id: str = Path(..., description="The closure ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        deleted = ClosureService.delete_closure(db, business_id, closure_id)
    except Exception as e:
        logger.error(f"Error deleting closure {closure_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete closure")

    if not deleted:
        raise HTTPException(status_code=404, detail="Closure not found")
    return Response(status_code=204)
