"""Merge rules for attendance coming from several sources.

Everything here is a pure function over :class:`TraineeDay` snapshots that the
repositories have already narrowed to the day (or week) in question. A trainee
may have up to three physical entries per day (one per type) and one online
entry per meeting; these functions decide what that adds up to.

Precedence is the same everywhere: Present wins over Absent, and a trainee
with no qualifying entry is "not marked", never "absent".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceCategory, DayStatus, MarkedBy, PhysicalAttendanceType
from ..trainees.model import Trainee
from .model import OnlineAttendanceEntry, PhysicalAttendanceEntry, TraineeDay

Entry = Union[PhysicalAttendanceEntry, OnlineAttendanceEntry]

MEETING_PHYSICAL_TYPES = (PhysicalAttendanceType.QR, PhysicalAttendanceType.MANUAL)

DETAIL_TYPE_LABELS = {
    PhysicalAttendanceType.DAILY_QR: "Daily",
    PhysicalAttendanceType.QR: "Meeting",
    PhysicalAttendanceType.MANUAL: "Manual",
}
ONLINE_DETAIL_LABEL = "Online Meeting"


@dataclass(frozen=True)
class DayCounts:
    present: int = 0
    absent: int = 0
    not_marked: int = 0

    def to_dict(self) -> dict:
        return {"present": self.present, "absent": self.absent, "notMarked": self.not_marked}


@dataclass(frozen=True)
class CategoryStats:
    daily: DayCounts
    meeting: DayCounts
    total: DayCounts

    def to_dict(self) -> dict:
        return {
            "dailyAttendance": self.daily.to_dict(),
            "meetingAttendance": self.meeting.to_dict(),
            "total": self.total.to_dict(),
        }


@dataclass
class MeetingStats:
    meeting_name: str
    present: int = 0
    absent: int = 0

    def to_dict(self) -> dict:
        return {"meetingName": self.meeting_name, "present": self.present, "absent": self.absent}


@dataclass(frozen=True)
class OnlineStats:
    date: date
    total_interns: int
    present: int
    absent: int
    meetings: tuple[MeetingStats, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "totalInterns": self.total_interns,
            "present": self.present,
            "absent": self.absent,
            "meetings": [m.to_dict() for m in self.meetings],
        }


@dataclass(frozen=True)
class AttendanceDetail:
    type: str
    time: Union[datetime, date]
    method: str
    meeting_name: Optional[str] = None

    def to_dict(self) -> dict:
        d = {"type": self.type, "time": isoformat_or_none(self.time), "method": self.method}
        if self.meeting_name is not None:
            d["meetingName"] = self.meeting_name
        return d


@dataclass(frozen=True)
class AttendedTrainee:
    trainee: Trainee
    details: tuple[AttendanceDetail, ...]

    def to_dict(self) -> dict:
        d = self.trainee.to_dict()
        d["attendanceInfo"] = [x.to_dict() for x in self.details]
        return d


def day_status(entries: Iterable[Entry]) -> DayStatus:
    seen = False
    for e in entries:
        if e.is_present:
            return DayStatus.PRESENT
        seen = True
    return DayStatus.ABSENT if seen else DayStatus.NOT_MARKED


def _count(statuses: Iterable[DayStatus]) -> DayCounts:
    present = absent = not_marked = 0
    for s in statuses:
        if s == DayStatus.PRESENT:
            present += 1
        elif s == DayStatus.ABSENT:
            absent += 1
        else:
            not_marked += 1
    return DayCounts(present=present, absent=absent, not_marked=not_marked)


def daily_entries(day: TraineeDay) -> list[Entry]:
    return [e for e in day.physical if e.type == PhysicalAttendanceType.DAILY_QR]


def meeting_entries(day: TraineeDay) -> list[Entry]:
    return [e for e in day.physical if e.type in MEETING_PHYSICAL_TYPES] + list(day.online)


def all_entries(day: TraineeDay) -> list[Entry]:
    return list(day.physical) + list(day.online)


def overall_status(day: TraineeDay) -> DayStatus:
    return day_status(all_entries(day))


def overall_stats(days: Iterable[TraineeDay]) -> DayCounts:
    """Present if either a physical or an online entry is Present."""
    return _count(overall_status(d) for d in days)


def stats_by_category(days: Iterable[TraineeDay]) -> CategoryStats:
    days = list(days)
    return CategoryStats(
        daily=_count(day_status(daily_entries(d)) for d in days),
        meeting=_count(day_status(meeting_entries(d)) for d in days),
        total=_count(day_status(all_entries(d)) for d in days),
    )


def online_stats(days: Iterable[TraineeDay], target: date) -> OnlineStats:
    """Online totals plus a per-meeting breakdown.

    Totals count each (trainee, meeting) pair once. Meetings are grouped by
    case-insensitive name; the first spelling seen is the one reported.
    """
    processed: set[tuple[int, str]] = set()
    meetings: dict[str, MeetingStats] = {}
    present = absent = 0

    for d in days:
        for e in d.online:
            if e.date != target:
                continue
            key = (d.trainee.id, e.meeting_key)
            if key in processed:
                continue
            processed.add(key)

            group = meetings.setdefault(e.meeting_key, MeetingStats(meeting_name=e.meeting_name))
            if e.is_present:
                present += 1
                group.present += 1
            else:
                absent += 1
                group.absent += 1

    return OnlineStats(
        date=target,
        total_interns=len(processed),
        present=present,
        absent=absent,
        meetings=tuple(meetings.values()),
    )


def method_label(marked_by: Optional[str]) -> str:
    if marked_by == MarkedBy.EXTERNAL_SYSTEM.value:
        return "QR Code Scan"
    if marked_by == MarkedBy.CSV_UPLOAD_SYSTEM.value:
        return "CSV Upload"
    return "Manual Entry"


def _physical_detail(e: PhysicalAttendanceEntry) -> AttendanceDetail:
    return AttendanceDetail(
        type=DETAIL_TYPE_LABELS[e.type],
        time=e.time_marked or e.date,
        method=method_label(e.marked_by),
    )


def _online_detail(e: OnlineAttendanceEntry) -> AttendanceDetail:
    return AttendanceDetail(
        type=ONLINE_DETAIL_LABEL,
        time=e.time_marked or e.date,
        method=method_label(e.marked_by),
        meeting_name=e.meeting_name or "N/A",
    )


def attendance_details(day: TraineeDay, category: AttendanceCategory) -> list[AttendanceDetail]:
    present_physical = {e.type: e for e in day.physical if e.is_present}
    present_online = [e for e in day.online if e.is_present]

    daily = present_physical.get(PhysicalAttendanceType.DAILY_QR)
    qr = present_physical.get(PhysicalAttendanceType.QR)
    manual = present_physical.get(PhysicalAttendanceType.MANUAL)

    details: list[AttendanceDetail] = []
    if category == AttendanceCategory.DAILY:
        if daily:
            details.append(_physical_detail(daily))
        return details

    if category == AttendanceCategory.MEETING:
        details.extend(_physical_detail(e) for e in (qr, manual) if e)
        details.extend(_online_detail(e) for e in present_online)
        return details

    if daily:
        details.append(_physical_detail(daily))
        # A meeting QR scan only counts alongside the daily check-in.
        if qr:
            details.append(_physical_detail(qr))
    if manual:
        details.append(_physical_detail(manual))
    details.extend(_online_detail(e) for e in present_online)
    return details


def attended_listing(days: Iterable[TraineeDay], category: AttendanceCategory) -> list[AttendedTrainee]:
    out: list[AttendedTrainee] = []
    for d in days:
        details = attendance_details(d, category)
        if details:
            out.append(AttendedTrainee(trainee=d.trainee, details=tuple(details)))
    return out


def weekly_summary(days: Sequence[TraineeDay]) -> tuple[list[Trainee], list[Trainee]]:
    """Split trainees into (attended, not attended) over the snapshot range."""
    attended: list[Trainee] = []
    not_attended: list[Trainee] = []
    for d in days:
        if any(e.is_present for e in all_entries(d)):
            attended.append(d.trainee)
        else:
            not_attended.append(d.trainee)
    return attended, not_attended
