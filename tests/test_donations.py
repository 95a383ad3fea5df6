from datetime import timedelta

import pytest
from pydantic import ValidationError as SchemaValidationError

from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.schemas.donation import DonationCreate, DonationStatus, DonationUpdate
from foodshare.schemas.product import ProductCreate
from foodshare.services.donation.donation_service import (
    DonationService,
    check_transition,
    donation_to_response,
    hours_remaining,
    next_status,
)
from foodshare.services.product.product_service import ProductService

from tests.conftest import BUSINESS_ID


def make_payload(product_id, now, **overrides):
    fields = dict(
        product_id=product_id,
        quantity=3,
        available_from=now,
        available_to=now + timedelta(days=1),
        collection_slots=["lunch"],
    )
    fields.update(overrides)
    return DonationCreate(**fields)


def test_fiscal_value_uses_unit_price_and_quantity(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    assert donation.fiscal_value == "38.40"
    assert donation.fiscal_policy == "full_value"
    assert donation.status == "active"
    assert donation.collection_slots == ["lunch"]


def test_tax_benefit_policy(db, salade, now):
    donation = DonationService.create_donation(
        db, BUSINESS_ID, make_payload(salade.id, now), fiscal_policy="tax_benefit"
    )
    assert donation.fiscal_value == "23.04"
    assert donation.fiscal_policy == "tax_benefit"


def test_unknown_product_rejected(db, business, now):
    with pytest.raises(ValidationError):
        DonationService.create_donation(db, BUSINESS_ID, make_payload("missing", now))
    assert DonationService.list_donations(db, BUSINESS_ID) == []


def test_non_positive_quantity_rejected(db, salade, now):
    payload = make_payload(salade.id, now).model_copy(update={"quantity": 0})
    with pytest.raises(ValidationError):
        DonationService.create_donation(db, BUSINESS_ID, payload)


def test_inverted_window_rejected(db, salade, now):
    payload = make_payload(salade.id, now).model_copy(update={"available_to": now - timedelta(hours=1)})
    with pytest.raises(ValidationError):
        DonationService.create_donation(db, BUSINESS_ID, payload)


def test_collection_slots_are_deduplicated():
    payload = DonationCreate(
        product_id="p",
        quantity=1,
        available_from="2025-03-10T10:00:00Z",
        available_to="2025-03-10T18:00:00Z",
        collection_slots=["lunch", "lunch", "dinner"],
    )
    assert payload.collection_slots == ["lunch", "dinner"]


def test_update_replaces_collection_slots(db, salade, now):
    donation = DonationService.create_donation(
        db, BUSINESS_ID, make_payload(salade.id, now, collection_slots=["lunch", "dinner"])
    )
    updated = DonationService.update_donation(
        db, BUSINESS_ID, donation.id, DonationUpdate(collection_slots=["morning"])
    )
    assert updated.collection_slots == ["morning"]
    assert updated.quantity == 3


def test_update_quantity_recomputes_with_stored_policy(db, salade, now):
    donation = DonationService.create_donation(
        db, BUSINESS_ID, make_payload(salade.id, now), fiscal_policy="tax_benefit"
    )
    updated = DonationService.update_donation(db, BUSINESS_ID, donation.id, DonationUpdate(quantity=1))
    assert updated.fiscal_value == "7.68"


def test_update_missing_donation(db, business):
    with pytest.raises(NotFoundError):
        DonationService.update_donation(db, BUSINESS_ID, "nope", DonationUpdate(quantity=1))


def test_update_cannot_clear_required_field(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    with pytest.raises(ValidationError):
        DonationService.update_donation(db, BUSINESS_ID, donation.id, DonationUpdate(quantity=None))


def test_update_rejects_inverted_window(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    with pytest.raises(ValidationError):
        DonationService.update_donation(
            db, BUSINESS_ID, donation.id, DonationUpdate(available_to=now - timedelta(days=1))
        )


def test_status_transitions(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    paused = DonationService.update_donation(
        db, BUSINESS_ID, donation.id, DonationUpdate(status=DonationStatus.PAUSED)
    )
    assert paused.status == "paused"
    done = DonationService.update_donation(
        db, BUSINESS_ID, donation.id, DonationUpdate(status=DonationStatus.COMPLETED)
    )
    assert done.status == "completed"
    with pytest.raises(ValidationError):
        DonationService.update_donation(
            db, BUSINESS_ID, donation.id, DonationUpdate(status=DonationStatus.ACTIVE)
        )


def test_check_transition_allows_same_status():
    check_transition(DonationStatus.COMPLETED, DonationStatus.COMPLETED)
    with pytest.raises(ValidationError):
        check_transition(DonationStatus.COMPLETED, DonationStatus.PAUSED)


def test_expired_status_is_derived_only(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    later = now + timedelta(days=2)

    assert next_status(donation, now) == DonationStatus.ACTIVE
    assert next_status(donation, later) == DonationStatus.EXPIRED
    assert donation.status == "active"

    response = donation_to_response(donation, later)
    assert response.status == DonationStatus.ACTIVE
    assert response.effective_status == DonationStatus.EXPIRED
    assert response.is_expired is True
    assert response.hours_remaining == 0


def test_hours_remaining(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    assert hours_remaining(donation, now) == 24
    assert hours_remaining(donation, now + timedelta(minutes=90)) == 22


def test_paused_donation_never_reads_expired(db, salade, now):
    donation = DonationService.create_donation(
        db, BUSINESS_ID, make_payload(salade.id, now, status=DonationStatus.PAUSED)
    )
    assert next_status(donation, now + timedelta(days=5)) == DonationStatus.PAUSED


def test_deleting_product_keeps_donations(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    assert ProductService.delete_product(db, BUSINESS_ID, salade.id) is True

    kept = DonationService.get_donation(db, BUSINESS_ID, donation.id)
    assert kept is not None
    assert kept.product_id == salade.id
    assert kept.fiscal_value == "38.40"

    updated = DonationService.update_donation(db, BUSINESS_ID, donation.id, DonationUpdate(quantity=1))
    assert updated.quantity == 1
    assert updated.fiscal_value == "38.40"


def test_delete_donation(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    assert DonationService.delete_donation(db, BUSINESS_ID, donation.id) is True
    assert DonationService.delete_donation(db, BUSINESS_ID, donation.id) is False


def test_donations_scoped_by_business(db, salade, now):
    donation = DonationService.create_donation(db, BUSINESS_ID, make_payload(salade.id, now))
    assert DonationService.get_donation(db, "someone-else", donation.id) is None
    assert DonationService.delete_donation(db, "someone-else", donation.id) is False


def test_huge_quantity_rejected_by_schema(now):
    with pytest.raises(SchemaValidationError):
        make_payload("p", now, quantity=10 ** 27)


def test_huge_quantity_rejected_by_service(db, salade, now):
    payload = make_payload(salade.id, now).model_copy(update={"quantity": 10 ** 27})
    with pytest.raises(ValidationError):
        DonationService.create_donation(db, BUSINESS_ID, payload)


def test_fiscal_overflow_is_a_validation_error(db, business, now):
    caviar = ProductService.create_product(
        db, BUSINESS_ID, ProductCreate(name="Caviar", category="Autres", unit_price="1e25")
    )
    with pytest.raises(ValidationError):
        DonationService.create_donation(db, BUSINESS_ID, make_payload(caviar.id, now, quantity=10000))
    assert DonationService.list_donations(db, BUSINESS_ID) == []
