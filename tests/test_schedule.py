from datetime import date

import pytest

from foodshare.config.settings import get_settings
from foodshare.core.errors import NotFoundError, PolicyViolation, StoreError, ValidationError
from foodshare.models.schedule import Schedule
from foodshare.schemas.schedule import ClosureCreate, ScheduleUpsert, TimeSlot
from foodshare.services.schedule.closure_service import ClosureService
from foodshare.services.schedule.schedule_service import ScheduleService, day_of_week_for
from foodshare.services.schedule.slot_policy import get_slot_policy

from tests.conftest import BUSINESS_ID

LUNCH = {"start_time": "11:30", "end_time": "14:30"}
DINNER = {"start_time": "18:30", "end_time": "22:00"}


def schedule_rows(db, day_of_week):
    return db.query(Schedule).filter(
        Schedule.business_id == BUSINESS_ID,
        Schedule.day_of_week == day_of_week
    ).all()


def test_upsert_keeps_one_record_per_day(db, business):
    ScheduleService.upsert_schedule(
        db, BUSINESS_ID,
        ScheduleUpsert(day_of_week=1, is_open=True, time_slots=[LUNCH, DINNER], business_type="restaurant")
    )
    closed = ScheduleService.upsert_schedule(db, BUSINESS_ID, ScheduleUpsert(day_of_week=1, is_open=False))

    assert len(schedule_rows(db, 1)) == 1
    assert closed.is_open is False
    assert [s["label"] for s in closed.time_slots] == ["Matin", "Soir"]
    assert [s["start_time"] for s in closed.time_slots] == ["11:30", "18:30"]


def test_new_day_defaults(db, business):
    schedule = ScheduleService.upsert_schedule(db, BUSINESS_ID, ScheduleUpsert(day_of_week=2))
    assert schedule.is_open is True
    assert schedule.time_slots == []
    assert schedule.business_type == "restaurant"


def test_business_type_aliases(db, business):
    schedule = ScheduleService.upsert_schedule(
        db, BUSINESS_ID, ScheduleUpsert(day_of_week=3, business_type="alimentaire")
    )
    assert schedule.business_type == "restaurant"
    assert ScheduleUpsert(day_of_week=3, business_type="Bien-être").business_type.value == "bien-etre"


def test_upsert_requires_business(db):
    with pytest.raises(NotFoundError):
        ScheduleService.upsert_schedule(db, "ghost", ScheduleUpsert(day_of_week=1))


def test_restaurant_rejects_third_slot(db, business):
    with pytest.raises(PolicyViolation):
        ScheduleService.upsert_schedule(
            db, BUSINESS_ID,
            ScheduleUpsert(
                day_of_week=1,
                time_slots=[LUNCH, DINNER, {"start_time": "15:00", "end_time": "16:00"}],
            )
        )
    assert schedule_rows(db, 1) == []


def test_culture_allows_single_all_day_slot(db, business):
    schedule = ScheduleService.upsert_schedule(
        db, BUSINESS_ID,
        ScheduleUpsert(day_of_week=6, business_type="culture", time_slots=[{"start_time": "10:00", "end_time": "18:00"}])
    )
    assert schedule.time_slots == [
        {"start_time": "10:00", "end_time": "18:00", "label": "Journée", "type": "all_day"}
    ]
    with pytest.raises(PolicyViolation):
        ScheduleService.add_slot(db, BUSINESS_ID, 6, TimeSlot(start_time="19:00", end_time="20:00"))


def test_bien_etre_is_unbounded():
    slots = [{"start_time": f"{h:02d}:00", "end_time": f"{h:02d}:30"} for h in range(8, 14)]
    applied = get_slot_policy("bien-etre").apply(slots)
    assert len(applied) == 6
    assert applied[0]["label"] == "Créneau 1"
    assert applied[0]["type"] == "custom"


def test_single_evening_slot_is_labelled_soir():
    applied = get_slot_policy("restaurant").apply([DINNER])
    assert applied[0]["label"] == "Soir"
    assert applied[0]["type"] == "evening"


def test_explicit_label_is_kept():
    applied = get_slot_policy("restaurant").apply([dict(LUNCH, label="Déjeuner")])
    assert applied[0]["label"] == "Déjeuner"


def test_overlapping_slots_rejected():
    with pytest.raises(PolicyViolation):
        get_slot_policy("bien-etre").apply([LUNCH, {"start_time": "14:00", "end_time": "15:00"}])


def test_malformed_slot_rejected():
    with pytest.raises(ValidationError):
        get_slot_policy("restaurant").apply([{"start_time": "25:00", "end_time": "26:00"}])


def test_add_and_remove_slot(db, business):
    ScheduleService.add_slot(db, BUSINESS_ID, 4, TimeSlot(**DINNER))
    schedule = ScheduleService.add_slot(db, BUSINESS_ID, 4, TimeSlot(**LUNCH))
    assert [s["label"] for s in schedule.time_slots] == ["Matin", "Soir"]

    with pytest.raises(PolicyViolation):
        ScheduleService.add_slot(db, BUSINESS_ID, 4, TimeSlot(start_time="15:00", end_time="16:00"))

    schedule = ScheduleService.remove_slot(db, BUSINESS_ID, 4, 0)
    assert [s["start_time"] for s in schedule.time_slots] == ["18:30"]

    with pytest.raises(NotFoundError):
        ScheduleService.remove_slot(db, BUSINESS_ID, 4, 5)
    with pytest.raises(NotFoundError):
        ScheduleService.remove_slot(db, BUSINESS_ID, 5, 0)


def test_copy_monday_to_weekdays(db, business):
    ScheduleService.upsert_schedule(
        db, BUSINESS_ID, ScheduleUpsert(day_of_week=1, time_slots=[LUNCH, DINNER])
    )
    result = ScheduleService.copy_day_slots(db, BUSINESS_ID)

    assert result.all_succeeded
    assert result.succeeded == [2, 3, 4, 5]
    for day in range(1, 6):
        schedule = ScheduleService.get_schedule_for_day(db, BUSINESS_ID, day)
        assert [s["start_time"] for s in schedule.time_slots] == ["11:30", "18:30"]


def test_copy_from_missing_day(db, business):
    with pytest.raises(NotFoundError):
        ScheduleService.copy_day_slots(db, BUSINESS_ID, source_day=0)


def test_bulk_reports_each_day(db, business):
    result = ScheduleService.bulk_upsert(db, BUSINESS_ID, [
        ScheduleUpsert(day_of_week=1, time_slots=[LUNCH]),
        ScheduleUpsert(day_of_week=2, time_slots=[LUNCH, DINNER, {"start_time": "15:00", "end_time": "16:00"}]),
    ])
    assert result.succeeded == [1]
    assert result.failed == [2]
    assert result.results[1].error


def test_close_all_with_failing_day(db, business, monkeypatch):
    original = ScheduleService.upsert_schedule

    def flaky_upsert(db, business_id, payload):
        if payload.day_of_week == 3:
            raise StoreError("simulated store failure")
        return original(db, business_id, payload)

    monkeypatch.setattr(ScheduleService, "upsert_schedule", flaky_upsert)
    result = ScheduleService.close_all_days(db, BUSINESS_ID)

    assert result.succeeded == [0, 1, 2, 4, 5, 6]
    assert result.failed == [3]
    assert not result.all_succeeded
    for day in (0, 1, 2, 4, 5, 6):
        assert ScheduleService.get_schedule_for_day(db, BUSINESS_ID, day).is_open is False
    assert ScheduleService.get_schedule_for_day(db, BUSINESS_ID, 3) is None


def test_day_of_week_for():
    assert day_of_week_for(date(2025, 3, 9)) == 0
    assert day_of_week_for(date(2025, 3, 10)) == 1
    assert day_of_week_for(date(2025, 3, 15)) == 6


def test_closure_overrides_availability(db, business):
    monday = date(2025, 3, 10)
    ScheduleService.upsert_schedule(db, BUSINESS_ID, ScheduleUpsert(day_of_week=1, time_slots=[LUNCH]))

    open_day = ScheduleService.day_availability(db, BUSINESS_ID, monday)
    assert open_day.is_open is True
    assert len(open_day.time_slots) == 1

    ClosureService.create_closure(db, BUSINESS_ID, ClosureCreate(date=monday, reason="Inventaire"))
    closed_day = ScheduleService.day_availability(db, BUSINESS_ID, monday)
    assert closed_day.is_open is False
    assert closed_day.time_slots == []
    assert closed_day.closure.reason == "Inventaire"

    next_monday = ScheduleService.day_availability(db, BUSINESS_ID, date(2025, 3, 17))
    assert next_monday.is_open is True


def test_closure_can_be_informational(db, business, monkeypatch):
    monkeypatch.setattr(get_settings(), "CLOSURES_OVERRIDE_SCHEDULE", False)
    monday = date(2025, 3, 10)
    ScheduleService.upsert_schedule(db, BUSINESS_ID, ScheduleUpsert(day_of_week=1, time_slots=[LUNCH]))
    ClosureService.create_closure(db, BUSINESS_ID, ClosureCreate(date=monday))

    availability = ScheduleService.day_availability(db, BUSINESS_ID, monday)
    assert availability.is_open is True
    assert availability.closure is not None


def test_emergency_closure_listed_first(db, business):
    day = date(2025, 3, 12)
    ClosureService.create_closure(db, BUSINESS_ID, ClosureCreate(date=day, reason="Congés"))
    ClosureService.create_closure(db, BUSINESS_ID, ClosureCreate(date=day, reason="Dégât des eaux", is_emergency=True))

    assert ClosureService.closure_on(db, BUSINESS_ID, day).is_emergency is True
    assert len(ClosureService.list_closures(db, BUSINESS_ID)) == 2


def test_delete_closure(db, business):
    closure = ClosureService.create_closure(db, BUSINESS_ID, ClosureCreate(date=date(2025, 3, 12)))
    assert ClosureService.delete_closure(db, "someone-else", closure.id) is False
    assert ClosureService.delete_closure(db, BUSINESS_ID, closure.id) is True
    assert ClosureService.list_closures(db, BUSINESS_ID) == []
