from __future__ import annotations

from datetime import date, datetime

import pytest

from fakes import InMemoryStore, add_trainee, online, physical
from intern_attendance.attendance import reconciliation as rec
from intern_attendance.attendance.model import TraineeDay
from intern_attendance.core.enums import (
    AttendanceCategory,
    AttendanceStatus,
    DayStatus,
    MarkedBy,
    PhysicalAttendanceType,
)

DAY = date(2026, 2, 2)
AT = datetime(2026, 2, 2, 8, 30)
P, A = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT
DAILY, QR, MANUAL = PhysicalAttendanceType.DAILY_QR, PhysicalAttendanceType.QR, PhysicalAttendanceType.MANUAL


@pytest.fixture
def people():
    store = InMemoryStore()
    return [add_trainee(store, f"TR00{i}", name) for i, name in enumerate(["Amal", "Bimal", "Chamal", "Dilan"], 1)]


def test_day_status_present_wins_over_absent(people):
    t = people[0]
    entries = [physical(t, DAY, MANUAL, A), online(t, DAY, "Standup", P)]
    assert rec.day_status(entries) == DayStatus.PRESENT
    assert rec.day_status([physical(t, DAY, MANUAL, A)]) == DayStatus.ABSENT
    assert rec.day_status([]) == DayStatus.NOT_MARKED


def test_overall_stats_separates_absent_from_not_marked(people):
    amal, bimal, chamal, dilan = people
    days = [
        TraineeDay(amal, physical=(physical(amal, DAY, MANUAL, A),), online=(online(amal, DAY, "Standup", P),)),
        TraineeDay(bimal, physical=(physical(bimal, DAY, DAILY, A),)),
        TraineeDay(chamal, online=(online(chamal, DAY, "Standup", A),)),
        TraineeDay(dilan),
    ]
    counts = rec.overall_stats(days)
    assert counts.to_dict() == {"present": 1, "absent": 2, "notMarked": 1}
    assert counts.present + counts.absent + counts.not_marked == len(days)


def test_stats_by_category_buckets(people):
    amal, bimal, chamal, _ = people
    days = [
        TraineeDay(amal, physical=(physical(amal, DAY, DAILY, P),)),
        TraineeDay(bimal, physical=(physical(bimal, DAY, QR, P), physical(bimal, DAY, DAILY, A))),
        TraineeDay(chamal, online=(online(chamal, DAY, "Standup", P),)),
    ]
    stats = rec.stats_by_category(days)

    assert stats.daily.to_dict() == {"present": 1, "absent": 1, "notMarked": 1}
    assert stats.meeting.to_dict() == {"present": 2, "absent": 0, "notMarked": 1}
    assert stats.total.to_dict() == {"present": 3, "absent": 0, "notMarked": 0}
    assert set(stats.to_dict()) == {"dailyAttendance", "meetingAttendance", "total"}


def test_online_stats_dedupes_and_groups_meetings_case_insensitively(people):
    amal, bimal, chamal, _ = people
    days = [
        TraineeDay(amal, online=(online(amal, DAY, "Standup", P), online(amal, DAY, "standup", P))),
        TraineeDay(bimal, online=(online(bimal, DAY, "STANDUP", A), online(bimal, DAY, "Retro", P))),
        TraineeDay(chamal, online=(online(chamal, date(2026, 2, 3), "Standup", P),)),
    ]
    stats = rec.online_stats(days, DAY).to_dict()

    assert stats["date"] == "2026-02-02"
    assert stats["totalInterns"] == 3
    assert stats["present"] == 2
    assert stats["absent"] == 1
    assert stats["meetings"] == [
        {"meetingName": "Standup", "present": 1, "absent": 1},
        {"meetingName": "Retro", "present": 1, "absent": 0},
    ]


@pytest.mark.parametrize(
    "marked_by, label",
    [
        (MarkedBy.EXTERNAL_SYSTEM.value, "QR Code Scan"),
        (MarkedBy.CSV_UPLOAD_SYSTEM.value, "CSV Upload"),
        (MarkedBy.MANUAL_SYSTEM.value, "Manual Entry"),
        (None, "Manual Entry"),
        ("front-desk", "Manual Entry"),
    ],
)
def test_method_label(marked_by, label):
    assert rec.method_label(marked_by) == label


def test_meeting_qr_listed_only_alongside_daily_check_in(people):
    amal, bimal, _, _ = people
    qr_only = TraineeDay(bimal, physical=(physical(bimal, DAY, QR, P, marked_by="external_system", at=AT),))
    both = TraineeDay(
        amal,
        physical=(
            physical(amal, DAY, DAILY, P, marked_by="external_system", at=AT),
            physical(amal, DAY, QR, P, marked_by="external_system", at=AT),
        ),
    )

    assert rec.attendance_details(qr_only, AttendanceCategory.ALL) == []
    assert [d.type for d in rec.attendance_details(both, AttendanceCategory.ALL)] == ["Daily", "Meeting"]
    assert [d.type for d in rec.attendance_details(qr_only, AttendanceCategory.MEETING)] == ["Meeting"]


def test_attendance_details_by_category(people):
    amal = people[0]
    d = TraineeDay(
        amal,
        physical=(
            physical(amal, DAY, DAILY, P, marked_by="external_system", at=AT),
            physical(amal, DAY, MANUAL, P, at=AT),
        ),
        online=(online(amal, DAY, "Standup", P, marked_by="csv_upload_system", at=AT), online(amal, DAY, "Retro", A)),
    )

    daily = rec.attendance_details(d, AttendanceCategory.DAILY)
    assert [x.to_dict() for x in daily] == [{"type": "Daily", "time": AT.isoformat(), "method": "QR Code Scan"}]

    meeting = rec.attendance_details(d, AttendanceCategory.MEETING)
    assert [x.type for x in meeting] == ["Manual", "Online Meeting"]
    assert meeting[1].to_dict() == {
        "type": "Online Meeting",
        "time": AT.isoformat(),
        "method": "CSV Upload",
        "meetingName": "Standup",
    }

    everything = rec.attendance_details(d, AttendanceCategory.ALL)
    assert [x.type for x in everything] == ["Daily", "Manual", "Online Meeting"]


def test_detail_time_falls_back_to_the_day(people):
    amal = people[0]
    d = TraineeDay(amal, physical=(physical(amal, DAY, MANUAL, P),))
    assert rec.attendance_details(d, AttendanceCategory.ALL)[0].to_dict()["time"] == "2026-02-02"


def test_attended_listing_skips_trainees_without_details(people):
    amal, bimal, _, _ = people
    days = [
        TraineeDay(amal, online=(online(amal, DAY, "Standup", P),)),
        TraineeDay(bimal, physical=(physical(bimal, DAY, MANUAL, A),)),
    ]
    listing = rec.attended_listing(days, AttendanceCategory.ALL)
    assert [row.trainee.trainee_id for row in listing] == ["TR001"]
    assert listing[0].to_dict()["attendanceInfo"][0]["meetingName"] == "Standup"


def test_weekly_summary_splits_by_any_present_entry(people):
    amal, bimal, chamal, _ = people
    days = [
        TraineeDay(amal, physical=(physical(amal, date(2026, 2, 4), DAILY, P),)),
        TraineeDay(bimal, physical=(physical(bimal, DAY, DAILY, A),)),
        TraineeDay(chamal, online=(online(chamal, date(2026, 2, 6), "Standup", P),)),
    ]
    attended, not_attended = rec.weekly_summary(days)
    assert [t.trainee_id for t in attended] == ["TR001", "TR003"]
    assert [t.trainee_id for t in not_attended] == ["TR002"]


def test_manual_only_entry_counts_for_meeting_not_daily(people):
    amal = people[0]
    days = [TraineeDay(amal, physical=(physical(amal, DAY, MANUAL, P),))]

    assert rec.overall_stats(days).present == 1
    stats = rec.stats_by_category(days)
    assert stats.meeting.present == 1
    assert stats.daily.to_dict() == {"present": 0, "absent": 0, "notMarked": 1}
