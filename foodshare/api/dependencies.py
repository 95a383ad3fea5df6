# ============================================================================
# FILE: foodshare/api/dependencies.py
# Tenant context shared by every route
# ============================================================================
from typing import Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from foodshare.config.database import get_db
from foodshare.config.settings import get_settings
from foodshare.services.business.business_service import BusinessService


def get_business_id(
        x_business_id: Optional[str] = Header(None, alias="X-Business-ID"),
        db: Session = Depends(get_db)
) -> str:
    """
    Resolve the business a request acts for.

    Taken from the X-Business-ID header, falling back to the configured
    default business. Unknown businesses are rejected with 404.
    """
    business_id = x_business_id or get_settings().DEFAULT_BUSINESS_ID

    if not BusinessService.get_business(db, business_id):
        raise HTTPException(
            status_code=404,
            detail="Business not found"
        )

    return business_id
