"""
Schedule Routes
Weekly collection schedule (one record per day), bulk edits and date availability
"""
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Path
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
import logging

from foodshare.api.dependencies import get_business_id
from foodshare.config.database import get_db
from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.schemas.schedule import (
    ScheduleUpsert,
    ScheduleResponse,
    TimeSlot,
    BulkScheduleRequest,
    BulkScheduleResult,
    CopyDaySlotsRequest,
    DayAvailability,
)
from foodshare.services.schedule.schedule_service import ScheduleService

logger = logging.getLogger(__name__)
router = APIRouter()


# ============================================================================
# Helper Functions
# ============================================================================

def _bulk_response(result: BulkScheduleResult) -> JSONResponse:
    """200 when every day was written, 207 when some days failed"""
    content = {
        "results": result.results,
        "succeeded": result.succeeded,
        "failed": result.failed,
    }
    status_code = 200 if result.all_succeeded else 207
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


# ============================================================================
# Endpoints
# ============================================================================

@router.get("", response_model=List[ScheduleResponse])
async def get_schedule(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        return ScheduleService.list_schedule(db, business_id)
    except Exception as e:
        logger.error(f"Error fetching schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch schedule")


@router.post("", response_model=ScheduleResponse)
async def upsert_schedule(
    payload: ScheduleUpsert,
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """
    Create or update the schedule of one day.
    Omitted fields keep their stored values.
    """
    try:
        return ScheduleService.upsert_schedule(db, business_id, payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid schedule data")
    except Exception as e:
        logger.error(f"Error saving schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to save schedule")


@router.post("/bulk")
async def bulk_upsert_schedule(
    payload: BulkScheduleRequest,
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Upsert several days; each day succeeds or fails on its own"""
    result = ScheduleService.bulk_upsert(db, business_id, payload.updates)
    return _bulk_response(result)


@router.post("/copy")
async def copy_day_slots(
    payload: CopyDaySlotsRequest,
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Apply one day's slots to other days (Monday to weekdays by default)"""
    try:
        result = ScheduleService.copy_day_slots(
            db, business_id, source_day=payload.source_day, target_days=payload.target_days
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return _bulk_response(result)


@router.post("/close-all")
async def close_all_days(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    result = ScheduleService.close_all_days(db, business_id)
    return _bulk_response(result)


@router.get("/availability", response_model=DayAvailability)
async def get_day_availability(
    day: date = Query(..., alias="date", description="Calendar date (YYYY-MM-DD)"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Effective availability of a date, closures applied"""
    return ScheduleService.day_availability(db, business_id, day)


@router.get("/{day_of_week}", response_model=ScheduleResponse)
async def get_schedule_for_day(
    day_of_week: int = Path(..., ge=0, le=6, description="0=Sunday, 6=Saturday"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    schedule = ScheduleService.get_schedule_for_day(db, business_id, day_of_week)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.post("/{day_of_week}/slots", response_model=ScheduleResponse)
async def add_slot(
    slot: TimeSlot,
    day_of_week: int = Path(..., ge=0, le=6),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Add a slot to a day; rejected when the business-type limit is reached"""
    try:
        return ScheduleService.add_slot(db, business_id, day_of_week, slot)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Slot rejected by schedule policy")


@router.delete("/{day_of_week}/slots/{index}", response_model=ScheduleResponse)
async def remove_slot(
    day_of_week: int = Path(..., ge=0, le=6),
    index: int = Path(..., ge=0),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        return ScheduleService.remove_slot(db, business_id, day_of_week, index)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Slot not found")
