# foodshare/services/donation/donation_service.py
"""Donation lifecycle: validation, fiscal value derivation and status rules"""
import math
from datetime import datetime, timezone
from typing import Optional, List, Dict, Set
from sqlalchemy.orm import Session
import logging

from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.models.base import as_utc
from foodshare.models.donation import Donation
from foodshare.schemas.donation import DonationCreate, DonationUpdate, DonationResponse, DonationStatus
from foodshare.schemas.product import MAX_UNITS
from foodshare.services.donation.fiscal import get_fiscal_policy
from foodshare.services.product.product_service import ProductService
from foodshare.services.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

# Caller-driven transitions; completed is terminal
ALLOWED_TRANSITIONS: Dict[DonationStatus, Set[DonationStatus]] = {
    DonationStatus.ACTIVE: {DonationStatus.PAUSED, DonationStatus.COMPLETED},
    DonationStatus.PAUSED: {DonationStatus.ACTIVE, DonationStatus.COMPLETED},
    DonationStatus.COMPLETED: set(),
}

NON_NULLABLE_FIELDS = (
    "product_id",
    "quantity",
    "max_per_person",
    "status",
    "available_from",
    "available_to",
    "collection_slots",
)


# ============================================================================
# Status helpers (pure, never mutate the stored record)
# ============================================================================

def is_expired(donation: Donation, now: datetime) -> bool:
    return as_utc(now) > as_utc(donation.available_to)


def next_status(donation: Donation, now: datetime) -> DonationStatus:
    """
    Status a donation should be displayed with at `now`.

    An active donation whose window has ended reads as expired; every other
    status is returned as stored. A scheduler may call this to decide on a
    transition, nothing here applies it.
    """
    status = DonationStatus(donation.status)
    if status == DonationStatus.ACTIVE and is_expired(donation, now):
        return DonationStatus.EXPIRED
    return status


def hours_remaining(donation: Donation, now: datetime) -> int:
    seconds = (as_utc(donation.available_to) - as_utc(now)).total_seconds()
    return max(0, math.floor(seconds / 3600))


def check_transition(current: DonationStatus, target: DonationStatus) -> None:
    if current == target:
        return
    if target not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ValidationError(
            f"Cannot change donation status from {current.value} to {target.value}"
        )


def donation_to_response(donation: Donation, now: Optional[datetime] = None) -> DonationResponse:
    now = now or datetime.now(timezone.utc)
    return DonationResponse(
        id=donation.id,
        business_id=donation.business_id,
        product_id=donation.product_id,
        quantity=donation.quantity,
        max_per_person=donation.max_per_person,
        description=donation.description,
        status=DonationStatus(donation.status),
        available_from=donation.available_from,
        available_to=donation.available_to,
        collection_slots=list(donation.collection_slots or []),
        fiscal_value=donation.fiscal_value,
        fiscal_policy=donation.fiscal_policy,
        created_at=donation.created_at,
        effective_status=next_status(donation, now),
        is_expired=is_expired(donation, now),
        hours_remaining=hours_remaining(donation, now),
    )


class DonationService:
    """Publishes, edits and cancels donations for a business"""

    @staticmethod
    def list_donations(db: Session, business_id: str) -> List[Donation]:
        return EntityStore(db, Donation).list_by_owner(business_id)

    @staticmethod
    def get_donation(db: Session, business_id: str, donation_id: str) -> Optional[Donation]:
        donation = EntityStore(db, Donation).get(donation_id)
        if donation is None or donation.business_id != business_id:
            return None
        return donation

    @staticmethod
    def create_donation(
            db: Session,
            business_id: str,
            payload: DonationCreate,
            fiscal_policy: Optional[str] = None
    ) -> Donation:
        """
        Publish a donation.

        - The product must exist and belong to the business
        - quantity > 0 and available_from <= available_to
        - fiscal_value = round(unit_price * quantity [* rate], 2)
        """
        policy = get_fiscal_policy(fiscal_policy)

        product = ProductService.get_product(db, business_id, payload.product_id)
        if not product:
            logger.warning(f"Donation rejected: product {payload.product_id} not found")
            raise ValidationError("Product not found", product_id=payload.product_id)

        if payload.quantity <= 0:
            raise ValidationError("Quantity must be positive")
        if payload.quantity > MAX_UNITS:
            raise ValidationError("Quantity is too large", quantity=payload.quantity)
        if payload.max_per_person < 1:
            raise ValidationError("max_per_person must be at least 1")

        available_from = as_utc(payload.available_from)
        available_to = as_utc(payload.available_to)
        if available_from > available_to:
            logger.warning("Donation rejected: availability window is inverted")
            raise ValidationError("available_from must not be after available_to")

        fiscal_value = policy.compute(product.unit_price, payload.quantity)

        donation = EntityStore(db, Donation).create(
            business_id=business_id,
            product_id=product.id,
            quantity=payload.quantity,
            max_per_person=payload.max_per_person,
            description=payload.description,
            status=payload.status.value,
            available_from=available_from,
            available_to=available_to,
            collection_slots=list(payload.collection_slots),
            fiscal_value=str(fiscal_value),
            fiscal_policy=policy.name,
        )

        logger.info(
            f"Published donation {donation.id}: {payload.quantity} x {product.name} "
            f"({policy.name} value {fiscal_value})"
        )
        return donation

    @staticmethod
    def update_donation(
            db: Session,
            business_id: str,
            donation_id: str,
            updates: DonationUpdate
    ) -> Donation:
        """Merge the provided fields; collection_slots replaces the stored list"""
        donation = DonationService.get_donation(db, business_id, donation_id)
        if not donation:
            raise NotFoundError("Donation not found", donation_id=donation_id)

        update_data = updates.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"{field} cannot be cleared")

        if "status" in update_data:
            target = DonationStatus(update_data["status"])
            check_transition(DonationStatus(donation.status), target)
            update_data["status"] = target.value

        for field in ("available_from", "available_to"):
            if field in update_data:
                update_data[field] = as_utc(update_data[field])

        available_from = update_data.get("available_from", donation.available_from)
        available_to = update_data.get("available_to", donation.available_to)
        if as_utc(available_from) > as_utc(available_to):
            raise ValidationError("available_from must not be after available_to")

        if "collection_slots" in update_data:
            update_data["collection_slots"] = list(update_data["collection_slots"])

        if "product_id" in update_data or "quantity" in update_data:
            product_id = update_data.get("product_id", donation.product_id)
            product = ProductService.get_product(db, business_id, product_id)
            if product:
                policy = get_fiscal_policy(donation.fiscal_policy)
                quantity = update_data.get("quantity", donation.quantity)
                update_data["fiscal_value"] = str(policy.compute(product.unit_price, quantity))
            elif "product_id" in update_data:
                raise ValidationError("Product not found", product_id=product_id)
            else:
                logger.warning(
                    f"Product {product_id} no longer exists, keeping fiscal value of donation {donation_id}"
                )

        donation = EntityStore(db, Donation).update(donation_id, update_data)
        logger.info(f"Updated donation {donation_id}: {sorted(update_data)}")
        return donation

    @staticmethod
    def delete_donation(db: Session, business_id: str, donation_id: str) -> bool:
        """Cancel a donation; returns False when it does not exist"""
        if DonationService.get_donation(db, business_id, donation_id) is None:
            return False
        deleted = EntityStore(db, Donation).delete(donation_id)
        if deleted:
            logger.info(f"Deleted donation {donation_id}")
        return deleted
