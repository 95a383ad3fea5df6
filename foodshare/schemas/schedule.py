"""
Pydantic schemas for weekly schedules, time slots and closures
"""
import re
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ScheduleBusinessType(str, Enum):
    RESTAURANT = "restaurant"
    CULTURE = "culture"
    BIEN_ETRE = "bien-etre"


# Spellings used by older clients
BUSINESS_TYPE_ALIASES = {
    "alimentaire": ScheduleBusinessType.RESTAURANT,
    "bien-être": ScheduleBusinessType.BIEN_ETRE,
    "bien_etre": ScheduleBusinessType.BIEN_ETRE,
}


def normalize_business_type(v):
    if isinstance(v, str):
        key = v.strip().lower()
        return BUSINESS_TYPE_ALIASES.get(key, key)
    return v


class SlotType(str, Enum):
    MORNING = "morning"
    EVENING = "evening"
    ALL_DAY = "all_day"
    CUSTOM = "custom"


class TimeSlot(BaseModel):
    """Collection window inside a day"""
    start_time: str = Field(..., description="Start time (HH:MM)")
    end_time: str = Field(..., description="End time (HH:MM)")
    label: Optional[str] = Field(None, max_length=100)
    type: Optional[SlotType] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not HHMM_PATTERN.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, v: str, info) -> str:
        start_time = info.data.get("start_time")
        if start_time and v <= start_time:
            raise ValueError("End time must be after start time")
        return v


# ============================================================================
# Request Schemas
# ============================================================================

class ScheduleUpsert(BaseModel):
    """Create or merge the schedule of one day; omitted fields keep their stored value"""
    day_of_week: int = Field(..., ge=0, le=6, description="Day of week (0=Sunday, 6=Saturday)")
    is_open: Optional[bool] = None
    time_slots: Optional[List[TimeSlot]] = None
    business_type: Optional[ScheduleBusinessType] = None

    @field_validator("business_type", mode="before")
    @classmethod
    def validate_business_type(cls, v):
        return normalize_business_type(v)


class BulkScheduleRequest(BaseModel):
    updates: List[ScheduleUpsert] = Field(..., min_length=1)


class CopyDaySlotsRequest(BaseModel):
    """Copy one day's slots to other days (defaults: Monday to every weekday)"""
    source_day: int = Field(1, ge=0, le=6)
    target_days: List[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])

    @field_validator("target_days")
    @classmethod
    def validate_target_days(cls, v):
        for day in v:
            if day < 0 or day > 6:
                raise ValueError("Days must be between 0 and 6")
        return list(dict.fromkeys(v))


class ClosureCreate(BaseModel):
    date: date
    reason: Optional[str] = Field(None, max_length=300)
    is_emergency: bool = False


# ============================================================================
# Response Schemas
# ============================================================================

class ScheduleResponse(BaseModel):
    id: str
    business_id: str
    day_of_week: int
    is_open: bool
    time_slots: List[TimeSlot]
    business_type: ScheduleBusinessType

    class Config:
        from_attributes = True


class ClosureResponse(BaseModel):
    id: str
    business_id: str
    date: date
    reason: Optional[str] = None
    is_emergency: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DayOutcome(BaseModel):
    """Result of one day inside a bulk schedule write"""
    day_of_week: int
    success: bool
    schedule: Optional[ScheduleResponse] = None
    error: Optional[str] = None


class BulkScheduleResult(BaseModel):
    results: List[DayOutcome] = Field(default_factory=list)

    @property
    def succeeded(self) -> List[int]:
        return [r.day_of_week for r in self.results if r.success]

    @property
    def failed(self) -> List[int]:
        return [r.day_of_week for r in self.results if not r.success]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


class DayAvailability(BaseModel):
    """Effective availability of a calendar date once closures are applied"""
    date: date
    day_of_week: int
    is_open: bool
    time_slots: List[TimeSlot] = Field(default_factory=list)
    closure: Optional[ClosureResponse] = None
