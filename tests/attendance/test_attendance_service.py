from __future__ import annotations

from datetime import date, datetime

import pytest

from fakes import add_trainee
from intern_attendance.core.enums import AttendanceStatus, DayStatus, PhysicalAttendanceType
from intern_attendance.core.exceptions import NotFoundError, ValidationError
from intern_attendance.trainees.refs import ByExternalId, ByInternalId


def test_mark_physical_upserts_per_day_and_type(store, container, fixed_now):
    kasun = add_trainee(store, "TR001", "Kasun")
    service = container.attendance_service

    service.mark_physical(ByInternalId(kasun.id), status="Absent", attendance_date="2026-02-02", now=fixed_now)
    trainee, entry = service.mark_physical(
        ByExternalId("TR001"), status="Present", attendance_date="2026-02-02", now=fixed_now
    )
    service.mark_physical(
        ByExternalId("TR001"), status="Present", attendance_date="2026-02-02", attendance_type="daily_qr",
        marked_by="external_system", now=fixed_now,
    )

    assert trainee.id == kasun.id
    assert entry.status == AttendanceStatus.PRESENT
    assert entry.type == PhysicalAttendanceType.MANUAL
    assert sorted(e.type.value for e in store.physical) == ["daily_qr", "manual"]


def test_mark_physical_prefers_explicit_time_marked(store, container, fixed_now):
    add_trainee(store, "TR001", "Kasun")
    _, entry = container.attendance_service.mark_physical(
        ByExternalId("TR001"),
        status="Present",
        attendance_date="2026-02-02",
        time_marked="2026-02-02T03:00:00Z",
        now=fixed_now,
    )
    # 03:00 UTC is 08:30 in Colombo
    assert entry.time_marked == datetime(2026, 2, 2, 8, 30)


def test_utc_timestamp_is_truncated_in_local_zone(store, container, fixed_now):
    add_trainee(store, "TR001", "Kasun")
    _, entry = container.attendance_service.mark_physical(
        ByExternalId("TR001"), status="Present", attendance_date="2026-02-01T20:00:00Z", now=fixed_now
    )
    assert entry.date == date(2026, 2, 2)


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"status": "Late"}, "Invalid status"),
        ({"status": "Present", "attendance_type": "badge"}, "Invalid type"),
        ({"status": "Present", "attendance_date": "02/02/2026"}, "Invalid"),
    ],
)
def test_mark_physical_validation(store, container, kwargs, message):
    add_trainee(store, "TR001", "Kasun")
    with pytest.raises(ValidationError, match=message):
        container.attendance_service.mark_physical(ByExternalId("TR001"), **kwargs)
    assert store.physical == []


def test_mark_physical_unknown_trainee(container):
    with pytest.raises(NotFoundError, match="traineeId=TR404"):
        container.attendance_service.mark_physical(ByExternalId("TR404"), status="Present")


def test_update_for_date_requires_date(store, container):
    kasun = add_trainee(store, "TR001", "Kasun")
    with pytest.raises(ValidationError, match="Date is required"):
        container.attendance_service.update_for_date(ByInternalId(kasun.id), attendance_date="", status="Present")


def test_day_statistics_combines_online_and_physical(store, container, fixed_now):
    add_trainee(store, "TR001", "Kasun")
    add_trainee(store, "TR002", "Nimali")
    add_trainee(store, "TR003", "Ruwan")
    container.attendance_service.mark_physical(
        ByExternalId("TR001"), status="Present", attendance_date="2026-02-02", attendance_type="daily_qr",
        now=fixed_now,
    )
    container.online_attendance_service.mark_manual(
        ByExternalId("TR002"), meeting_name="Standup", status="Absent", attendance_date="2026-02-02", now=fixed_now
    )

    stats = container.attendance_service.day_statistics("2026-02-02")

    assert stats["totalInterns"] == 1
    assert stats["absent"] == 1
    assert stats["meetings"] == [{"meetingName": "Standup", "present": 0, "absent": 1}]
    assert stats["overall"] == {"present": 1, "absent": 1, "notMarked": 1}
    assert stats["byType"]["dailyAttendance"] == {"present": 1, "absent": 0, "notMarked": 2}


def test_trainees_with_status(store, container, fixed_now):
    add_trainee(store, "TR001", "Kasun")
    add_trainee(store, "TR002", "Nimali")
    container.attendance_service.mark_physical(
        ByExternalId("TR002"), status="Absent", attendance_date="2026-02-02", now=fixed_now
    )
    statuses = {t.trainee_id: s for t, s in container.attendance_service.trainees_with_status("2026-02-02")}
    assert statuses == {"TR001": DayStatus.NOT_MARKED, "TR002": DayStatus.ABSENT}


def test_attended_today_rejects_unknown_category(container):
    with pytest.raises(ValidationError, match="Invalid type"):
        container.attendance_service.attended_today("hybrid", "2026-02-02")


def test_weekly_summary_uses_monday_to_sunday(store, container, fixed_now):
    add_trainee(store, "TR001", "Kasun")
    add_trainee(store, "TR002", "Nimali")
    container.attendance_service.mark_physical(
        ByExternalId("TR001"), status="Present", attendance_date="2026-02-08", now=fixed_now
    )
    container.attendance_service.mark_physical(
        ByExternalId("TR002"), status="Present", attendance_date="2026-02-09", now=fixed_now
    )

    summary = container.attendance_service.weekly_summary("2026-02-04")

    assert summary["weekStart"] == "2026-02-02"
    assert summary["weekEnd"] == "2026-02-08"
    assert [t["traineeId"] for t in summary["attendedInterns"]] == ["TR001"]
    assert [t["traineeId"] for t in summary["notAttendedInterns"]] == ["TR002"]
