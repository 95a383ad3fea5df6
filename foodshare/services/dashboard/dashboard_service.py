# foodshare/services/dashboard/dashboard_service.py
"""Derived views over the entity store, recomputed on every call"""
import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List
from sqlalchemy.orm import Session
import logging

from foodshare.config.settings import get_settings
from foodshare.models.base import as_utc
from foodshare.models.donation import Donation
from foodshare.models.product import Product
from foodshare.schemas.dashboard import ImpactSummary
from foodshare.schemas.donation import DonationStatus
from foodshare.services.donation.donation_service import DonationService
from foodshare.services.donation.fiscal import CENTS
from foodshare.services.product.product_service import ProductService

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class DashboardService:
    """Filters and aggregates for the business dashboard"""

    @staticmethod
    def donations_with_status(db: Session, business_id: str, status: DonationStatus) -> List[Donation]:
        return [
            d for d in DonationService.list_donations(db, business_id)
            if d.status == status.value
        ]

    @staticmethod
    def active_donations(db: Session, business_id: str) -> List[Donation]:
        return DashboardService.donations_with_status(db, business_id, DonationStatus.ACTIVE)

    @staticmethod
    def completed_donations(db: Session, business_id: str) -> List[Donation]:
        return DashboardService.donations_with_status(db, business_id, DonationStatus.COMPLETED)

    @staticmethod
    def waste_reduced(db: Session, business_id: str) -> int:
        """Units saved: sum of quantities over completed donations"""
        return sum(d.quantity for d in DashboardService.completed_donations(db, business_id))

    @staticmethod
    def people_benefited(db: Session, business_id: str) -> int:
        """Portion-based estimate: floor(waste_reduced * PEOPLE_PER_UNIT)"""
        waste = DashboardService.waste_reduced(db, business_id)
        return math.floor(waste * get_settings().PEOPLE_PER_UNIT)

    @staticmethod
    def low_stock_products(
            db: Session,
            business_id: str,
            threshold: Optional[int] = None
    ) -> List[Product]:
        if threshold is None:
            threshold = get_settings().LOW_STOCK_THRESHOLD
        return [
            p for p in ProductService.list_products(db, business_id)
            if p.current_stock <= threshold
        ]

    @staticmethod
    def expiring_products(
            db: Session,
            business_id: str,
            now: Optional[datetime] = None,
            within_days: Optional[float] = None
    ) -> List[Product]:
        """Products whose expiry is at most `within_days` away (already expired included)"""
        now = as_utc(now) if now else datetime.now(timezone.utc)
        if within_days is None:
            within_days = get_settings().EXPIRING_WITHIN_DAYS

        expiring = []
        for product in ProductService.list_products(db, business_id):
            if product.expiry_date is None:
                continue
            days_left = (as_utc(product.expiry_date) - now).total_seconds() / SECONDS_PER_DAY
            if days_left <= within_days:
                expiring.append(product)
        return sorted(expiring, key=lambda p: p.expiry_date)

    @staticmethod
    def impact_summary(db: Session, business_id: str) -> ImpactSummary:
        completed = DashboardService.completed_donations(db, business_id)
        waste = sum(d.quantity for d in completed)
        total_value = sum((Decimal(d.fiscal_value) for d in completed if d.fiscal_value), Decimal("0.00"))

        return ImpactSummary(
            active_donations=len(DashboardService.active_donations(db, business_id)),
            completed_donations=len(completed),
            waste_reduced=waste,
            people_benefited=math.floor(waste * get_settings().PEOPLE_PER_UNIT),
            total_fiscal_value=str(total_value.quantize(CENTS, rounding=ROUND_HALF_UP)),
        )
