# foodshare/schemas/__init__.py
from .business import (
    BusinessCreate,
    BusinessUpdateRequest,
    BusinessResponse
)

from .product import (
    ProductCategory,
    ExpiryStatus,
    ProductCreate,
    ProductUpdate,
    ProductResponse
)

from .donation import (
    DonationStatus,
    DonationCreate,
    DonationUpdate,
    DonationResponse
)

from .schedule import (
    ScheduleBusinessType,
    SlotType,
    TimeSlot,
    ScheduleUpsert,
    BulkScheduleRequest,
    CopyDaySlotsRequest,
    ClosureCreate,
    ScheduleResponse,
    ClosureResponse,
    DayOutcome,
    BulkScheduleResult,
    DayAvailability
)

from .dashboard import ImpactSummary
