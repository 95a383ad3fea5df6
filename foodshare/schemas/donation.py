"""
Pydantic schemas for Donation validation and serialization
"""
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime

from foodshare.models.base import as_utc
from foodshare.schemas.product import MAX_UNITS


class DonationStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    # Derived only, never stored
    EXPIRED = "expired"


STORED_STATUSES = (DonationStatus.ACTIVE, DonationStatus.PAUSED, DonationStatus.COMPLETED)


def _unique_labels(labels: Optional[List[str]]) -> Optional[List[str]]:
    if labels is None:
        return labels
    seen = []
    for label in labels:
        label = label.strip()
        if not label:
            raise ValueError("Collection slot labels cannot be empty")
        if label not in seen:
            seen.append(label)
    return seen


def _stored_status(v: Optional[DonationStatus]) -> Optional[DonationStatus]:
    if v is not None and v not in STORED_STATUSES:
        raise ValueError("Status must be active, paused or completed")
    return v


# ============================================================================
# Request Schemas
# ============================================================================

class DonationCreate(BaseModel):
    """Request model for publishing a donation"""
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, le=MAX_UNITS)
    max_per_person: int = Field(1, ge=1, le=MAX_UNITS)
    description: Optional[str] = None
    status: DonationStatus = Field(DonationStatus.ACTIVE)
    available_from: datetime
    available_to: datetime
    collection_slots: List[str] = Field(default_factory=list, description="Labels such as 'lunch', 'dinner'")

    @field_validator("collection_slots")
    @classmethod
    def validate_collection_slots(cls, v):
        return _unique_labels(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return _stored_status(v)

    @model_validator(mode="after")
    def window_is_ordered(self):
        if as_utc(self.available_from) > as_utc(self.available_to):
            raise ValueError("available_from must not be after available_to")
        return self


class DonationUpdate(BaseModel):
    """Request model for editing a donation; collection_slots replaces the stored list"""
    product_id: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, ge=1, le=MAX_UNITS)
    max_per_person: Optional[int] = Field(None, ge=1, le=MAX_UNITS)
    description: Optional[str] = None
    status: Optional[DonationStatus] = None
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None
    collection_slots: Optional[List[str]] = None

    @field_validator("collection_slots")
    @classmethod
    def validate_collection_slots(cls, v):
        return _unique_labels(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return _stored_status(v)


# ============================================================================
# Response Schemas
# ============================================================================

class DonationResponse(BaseModel):
    """Response model for donation data with display-only derived fields"""
    id: str
    business_id: str
    product_id: str
    quantity: int
    max_per_person: int
    description: Optional[str] = None
    status: DonationStatus
    available_from: datetime
    available_to: datetime
    collection_slots: List[str]
    fiscal_value: Optional[str] = None
    fiscal_policy: str
    created_at: Optional[datetime] = None

    effective_status: DonationStatus
    is_expired: bool
    hours_remaining: int
