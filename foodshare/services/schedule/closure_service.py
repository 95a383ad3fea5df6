# foodshare/services/schedule/closure_service.py
"""Exceptional and emergency closures"""
from datetime import date
from typing import Optional, List
from sqlalchemy.orm import Session
import logging

from foodshare.models.schedule import Closure
from foodshare.schemas.schedule import ClosureCreate
from foodshare.services.business.business_service import BusinessService
from foodshare.services.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class ClosureService:

    @staticmethod
    def list_closures(db: Session, business_id: str) -> List[Closure]:
        closures = EntityStore(db, Closure).list_by_owner(business_id)
        return sorted(closures, key=lambda c: c.date)

    @staticmethod
    def create_closure(db: Session, business_id: str, payload: ClosureCreate) -> Closure:
        BusinessService.require_business(db, business_id)
        closure = EntityStore(db, Closure).create(business_id=business_id, **payload.model_dump())
        kind = "emergency closure" if closure.is_emergency else "closure"
        logger.info(f"Created {kind} {closure.id} on {closure.date} for business {business_id}")
        return closure

    @staticmethod
    def delete_closure(db: Session, business_id: str, closure_id: str) -> bool:
        store = EntityStore(db, Closure)
        closure = store.get(closure_id)
        if closure is None or closure.business_id != business_id:
            return False
        return store.delete(closure_id)

    @staticmethod
    def closure_on(db: Session, business_id: str, day: date) -> Optional[Closure]:
        """Closure matching the date, emergency closures first"""
        return db.query(Closure).filter(
            Closure.business_id == business_id,
            Closure.date == day
        ).order_by(Closure.is_emergency.desc()).first()
