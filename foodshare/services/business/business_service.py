# foodshare/services/business/business_service.py
"""Service for managing donor businesses"""
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session
import logging

from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.models.business import Business
from foodshare.schemas.business import BusinessCreate, BusinessUpdateRequest
from foodshare.schemas.schedule import ScheduleBusinessType
from foodshare.services.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

# Declared business types mapped to the schedule policy they follow
CULTURE_KEYWORDS = ("théâtre", "theatre", "theater", "concert", "cinéma", "cinema", "musée", "museum", "culture")
BIEN_ETRE_KEYWORDS = ("yoga", "sport", "coiffeur", "salon", "spa", "bien-être", "bien-etre", "fitness")


class BusinessService:
    """Handles business-related operations"""

    @staticmethod
    def get_business(db: Session, business_id: str) -> Optional[Business]:
        """Get business by id"""
        return EntityStore(db, Business).get(business_id)

    @staticmethod
    def require_business(db: Session, business_id: str) -> Business:
        business = BusinessService.get_business(db, business_id)
        if not business:
            raise NotFoundError("Business not found", business_id=business_id)
        return business

    @staticmethod
    def create_business(
            db: Session,
            payload: BusinessCreate,
            business_id: Optional[str] = None
    ) -> Business:
        """Create a business, optionally with a fixed id"""
        fields = payload.model_dump()
        if business_id:
            fields["id"] = business_id

        business = EntityStore(db, Business).create(**fields)
        logger.info(f"Created business {business.id} ({business.name})")
        return business

    @staticmethod
    def update_business(
            db: Session,
            business_id: str,
            updates: BusinessUpdateRequest
    ) -> Business:
        """Merge the provided fields onto the business"""
        update_data: Dict[str, Any] = updates.model_dump(exclude_unset=True)
        update_data = {k: v for k, v in update_data.items() if v is not None}

        if not update_data:
            raise ValidationError("No valid fields to update")

        business = EntityStore(db, Business).update(business_id, update_data)
        if not business:
            raise NotFoundError("Business not found", business_id=business_id)

        logger.info(f"Updated business {business_id}: {sorted(update_data)}")
        return business

    @staticmethod
    def schedule_type_for(business: Optional[Business]) -> ScheduleBusinessType:
        """Pick the schedule policy matching the business's declared type"""
        if business is None or not business.type:
            return ScheduleBusinessType.RESTAURANT

        declared = business.type.lower()
        if any(word in declared for word in CULTURE_KEYWORDS):
            return ScheduleBusinessType.CULTURE
        if any(word in declared for word in BIEN_ETRE_KEYWORDS):
            return ScheduleBusinessType.BIEN_ETRE
        return ScheduleBusinessType.RESTAURANT
