# foodshare/services/schedule/schedule_service.py
"""Weekly collection schedule: one record per (business, day_of_week)"""
from datetime import date
from typing import Optional, List, Iterable
from sqlalchemy.orm import Session
import logging

from foodshare.config.settings import get_settings
from foodshare.core.errors import FoodshareError, NotFoundError, ValidationError
from foodshare.models.schedule import Schedule
from foodshare.schemas.schedule import (
    ScheduleUpsert,
    ScheduleResponse,
    TimeSlot,
    DayOutcome,
    BulkScheduleResult,
    DayAvailability,
    ClosureResponse,
)
from foodshare.services.business.business_service import BusinessService
from foodshare.services.schedule.closure_service import ClosureService
from foodshare.services.schedule.slot_policy import get_slot_policy
from foodshare.services.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

ALL_DAYS = range(7)
DAY_NAMES = ["Dimanche", "Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi"]


def day_of_week_for(day: date) -> int:
    """0=Sunday .. 6=Saturday"""
    return day.isoweekday() % 7


class ScheduleService:
    """Upserts schedule days and enforces the business-type slot policy"""

    @staticmethod
    def list_schedule(db: Session, business_id: str) -> List[Schedule]:
        schedules = EntityStore(db, Schedule).list_by_owner(business_id)
        return sorted(schedules, key=lambda s: s.day_of_week)

    @staticmethod
    def get_schedule_for_day(db: Session, business_id: str, day_of_week: int) -> Optional[Schedule]:
        """The record for the day; upserts never create a second one"""
        return db.query(Schedule).filter(
            Schedule.business_id == business_id,
            Schedule.day_of_week == day_of_week
        ).first()

    @staticmethod
    def upsert_schedule(db: Session, business_id: str, payload: ScheduleUpsert) -> Schedule:
        """
        Create or merge the schedule of one day.

        Field-level merge: is_open, time_slots and business_type keep their
        stored value when omitted; time_slots, when given, replace the list.
        A new day defaults is_open to SCHEDULE_DEFAULT_IS_OPEN and derives the
        business type from the business when none is given.
        """
        if payload.day_of_week not in ALL_DAYS:
            raise ValidationError("day_of_week must be between 0 and 6")

        business = BusinessService.require_business(db, business_id)
        existing = ScheduleService.get_schedule_for_day(db, business_id, payload.day_of_week)

        if payload.business_type is not None:
            business_type = payload.business_type
        elif existing is not None:
            business_type = existing.business_type
        else:
            business_type = BusinessService.schedule_type_for(business)

        if payload.time_slots is not None:
            slots = payload.time_slots
        elif existing is not None:
            slots = existing.time_slots or []
        else:
            slots = []

        time_slots = get_slot_policy(business_type).apply(slots)
        business_type_value = getattr(business_type, "value", business_type)

        store = EntityStore(db, Schedule)
        if existing is not None:
            fields = {"time_slots": time_slots, "business_type": business_type_value}
            if payload.is_open is not None:
                fields["is_open"] = payload.is_open
            schedule = store.update(existing.id, fields)
            logger.info(f"Updated schedule for business {business_id}, day {payload.day_of_week}")
        else:
            is_open = payload.is_open
            if is_open is None:
                is_open = get_settings().SCHEDULE_DEFAULT_IS_OPEN
            schedule = store.create(
                business_id=business_id,
                day_of_week=payload.day_of_week,
                is_open=is_open,
                time_slots=time_slots,
                business_type=business_type_value,
            )
            logger.info(f"Created schedule for business {business_id}, day {payload.day_of_week}")

        return schedule

    @staticmethod
    def add_slot(db: Session, business_id: str, day_of_week: int, slot: TimeSlot) -> Schedule:
        """Append one slot to a day; rejected with PolicyViolation over the limit"""
        existing = ScheduleService.get_schedule_for_day(db, business_id, day_of_week)
        current = [TimeSlot(**s) for s in (existing.time_slots if existing else [])]
        return ScheduleService.upsert_schedule(
            db,
            business_id,
            ScheduleUpsert(day_of_week=day_of_week, time_slots=current + [slot])
        )

    @staticmethod
    def remove_slot(db: Session, business_id: str, day_of_week: int, index: int) -> Schedule:
        existing = ScheduleService.get_schedule_for_day(db, business_id, day_of_week)
        if existing is None:
            raise NotFoundError("Schedule not found", day_of_week=day_of_week)

        slots = list(existing.time_slots or [])
        if index < 0 or index >= len(slots):
            raise NotFoundError("Slot not found", day_of_week=day_of_week, index=index)

        del slots[index]
        return ScheduleService.upsert_schedule(
            db,
            business_id,
            ScheduleUpsert(day_of_week=day_of_week, time_slots=[TimeSlot(**s) for s in slots])
        )

    # ========================================================================
    # Bulk operations (best effort: each day commits on its own)
    # ========================================================================

    @staticmethod
    def bulk_upsert(db: Session, business_id: str, updates: Iterable[ScheduleUpsert]) -> BulkScheduleResult:
        """Apply several day upserts, reporting the outcome of every day"""
        result = BulkScheduleResult()

        for update in updates:
            try:
                schedule = ScheduleService.upsert_schedule(db, business_id, update)
                result.results.append(DayOutcome(
                    day_of_week=update.day_of_week,
                    success=True,
                    schedule=ScheduleResponse.model_validate(schedule),
                ))
            except FoodshareError as e:
                logger.warning(f"Schedule write failed for day {update.day_of_week}: {e.message}")
                result.results.append(DayOutcome(
                    day_of_week=update.day_of_week,
                    success=False,
                    error=e.message or type(e).__name__,
                ))

        if result.failed:
            logger.warning(
                f"Bulk schedule update for business {business_id}: "
                f"{len(result.succeeded)} succeeded, failed days {result.failed}"
            )
        return result

    @staticmethod
    def copy_day_slots(
            db: Session,
            business_id: str,
            source_day: int = 1,
            target_days: Iterable[int] = (1, 2, 3, 4, 5)
    ) -> BulkScheduleResult:
        """Apply one day's slots (Monday by default) to other days"""
        source = ScheduleService.get_schedule_for_day(db, business_id, source_day)
        if source is None:
            raise NotFoundError("Schedule not found", day_of_week=source_day)

        slots = [TimeSlot(**s) for s in (source.time_slots or [])]
        updates = [
            ScheduleUpsert(
                day_of_week=day,
                is_open=source.is_open,
                time_slots=slots,
                business_type=source.business_type,
            )
            for day in target_days
            if day != source_day
        ]
        return ScheduleService.bulk_upsert(db, business_id, updates)

    @staticmethod
    def close_all_days(db: Session, business_id: str) -> BulkScheduleResult:
        updates = [ScheduleUpsert(day_of_week=day, is_open=False) for day in ALL_DAYS]
        return ScheduleService.bulk_upsert(db, business_id, updates)

    # ========================================================================
    # Effective availability
    # ========================================================================

    @staticmethod
    def day_availability(db: Session, business_id: str, day: date) -> DayAvailability:
        """
        Availability of a calendar date: the weekly schedule of that weekday,
        closed when a closure exists on the date.
        """
        day_of_week = day_of_week_for(day)
        schedule = ScheduleService.get_schedule_for_day(db, business_id, day_of_week)

        if schedule is not None:
            is_open = schedule.is_open
            time_slots = [TimeSlot(**s) for s in (schedule.time_slots or [])]
        else:
            is_open = get_settings().SCHEDULE_DEFAULT_IS_OPEN
            time_slots = []

        closure = ClosureService.closure_on(db, business_id, day)
        if closure is not None and get_settings().CLOSURES_OVERRIDE_SCHEDULE:
            is_open = False

        return DayAvailability(
            date=day,
            day_of_week=day_of_week,
            is_open=is_open,
            time_slots=time_slots if is_open else [],
            closure=ClosureResponse.model_validate(closure) if closure else None,
        )
