from __future__ import annotations

from datetime import date

import pytest

from fakes import add_trainee
from intern_attendance.core.enums import Weekday
from intern_attendance.core.exceptions import NotFoundError, ValidationError
from intern_attendance.trainees.refs import ByExternalId, ByInternalId, parse_trainee_ref, ref_from_payload


def _payload(**overrides):
    data = {
        "traineeId": "TR010",
        "traineeName": "Sahan",
        "fieldOfSpecialization": "Data Engineering",
        "trainingStartDate": "2026-01-05",
        "trainingEndDate": "2026-07-05",
        "availableDays": ["Monday", "Wednesday", "Monday"],
    }
    data.update(overrides)
    return data


def test_parse_trainee_ref_by_json_type():
    assert parse_trainee_ref(7) == ByInternalId(7)
    assert parse_trainee_ref(" TR001 ") == ByExternalId("TR001")
    assert parse_trainee_ref("7") == ByExternalId("7")
    for bad in (None, "", True, 1.5):
        with pytest.raises(ValidationError):
            parse_trainee_ref(bad)


def test_ref_from_payload_prefers_trainee_id():
    assert ref_from_payload({"traineeId": "TR001", "internId": 3}) == ByExternalId("TR001")
    assert ref_from_payload({"internId": 3}) == ByInternalId(3)
    assert ref_from_payload({"traineeId": " ", "internId": "TR002"}) == ByExternalId("TR002")


def test_add_creates_trainee_with_deduped_days(container):
    trainee = container.trainee_service.add(_payload())
    assert trainee.trainee_id == "TR010"
    assert trainee.training_start_date == date(2026, 1, 5)
    assert trainee.available_days == (Weekday.MONDAY, Weekday.WEDNESDAY)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"traineeId": ""}, "Trainee ID is required"),
        ({"traineeName": None}, "Trainee name is required"),
        ({"fieldOfSpecialization": "  "}, "Field of specialization is required"),
        ({"trainingEndDate": "2025-12-31"}, "cannot be before"),
        ({"availableDays": ["Sunday"]}, "Invalid day"),
        ({"availableDays": "Monday"}, "must be a list"),
    ],
)
def test_add_validation(container, overrides, message):
    with pytest.raises(ValidationError, match=message):
        container.trainee_service.add(_payload(**overrides))


def test_add_rejects_duplicate_trainee_id(store, container):
    add_trainee(store, "TR010", "Existing")
    with pytest.raises(ValidationError, match="already exists"):
        container.trainee_service.add(_payload())


def test_trainee_id_is_immutable(store, container):
    kasun = add_trainee(store, "TR001", "Kasun")
    service = container.trainee_service

    with pytest.raises(ValidationError, match="cannot be changed"):
        service.update(ByInternalId(kasun.id), {"traineeId": "TR999"})

    updated = service.update(ByInternalId(kasun.id), {"traineeId": "TR001", "institute": "SLIIT", "team": "Core"})
    assert updated.trainee_id == "TR001"
    assert updated.institute == "SLIIT"
    assert updated.team == "Core"


def test_update_checks_training_range_against_stored_dates(container):
    trainee = container.trainee_service.add(_payload())
    with pytest.raises(ValidationError):
        container.trainee_service.update(ByInternalId(trainee.id), {"trainingEndDate": "2025-06-01"})


def test_update_replaces_available_days(store, container):
    kasun = add_trainee(store, "TR001", "Kasun")
    updated = container.trainee_service.update(ByInternalId(kasun.id), {"availableDays": ["Friday"]})
    assert updated.available_days == (Weekday.FRIDAY,)


def test_available_day_add_and_remove(store, container):
    kasun = add_trainee(store, "TR001", "Kasun")
    service = container.trainee_service
    ref = ByInternalId(kasun.id)

    assert service.add_available_day(ref, "Tuesday").available_days == (Weekday.MONDAY, Weekday.TUESDAY)
    assert service.add_available_day(ref, "Tuesday").available_days == (Weekday.MONDAY, Weekday.TUESDAY)
    assert service.remove_available_day(ref, "Monday").available_days == (Weekday.TUESDAY,)

    with pytest.raises(ValidationError):
        service.add_available_day(ref, "Saturday")


def test_update_email(store, container):
    add_trainee(store, "TR001", "Kasun")
    service = container.trainee_service
    assert service.update_email("TR001", "kasun@corp.example").email == "kasun@corp.example"
    with pytest.raises(ValidationError, match="Invalid email"):
        service.update_email("TR001", "kasun.corp")
    with pytest.raises(NotFoundError):
        service.update_email("TR404", "x@example.com")


def test_delete_removes_trainee_and_attendance(store, container, fixed_now):
    kasun = add_trainee(store, "TR001", "Kasun")
    container.attendance_service.mark_physical(ByInternalId(kasun.id), status="Present", now=fixed_now)

    deleted = container.trainee_service.delete(ByInternalId(kasun.id))

    assert deleted.trainee_id == "TR001"
    assert store.physical == []
    with pytest.raises(NotFoundError):
        container.trainee_service.resolve(ByInternalId(kasun.id))
