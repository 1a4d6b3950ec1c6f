from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus, OnlineAttendanceType, PhysicalAttendanceType
from ..trainees.model import Trainee


@dataclass(frozen=True)
class PhysicalAttendanceEntry:
    """Domain entity: an in-person attendance mark (QR scan or manual)."""

    id: int
    trainee_pk: int
    date: date
    status: AttendanceStatus
    type: PhysicalAttendanceType
    time_marked: Optional[datetime] = None
    marked_by: Optional[str] = None
    session_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "type": self.type.value,
            "timeMarked": isoformat_or_none(self.time_marked),
            "markedBy": self.marked_by,
            "sessionId": self.session_id,
            "createdAt": isoformat_or_none(self.created_at),
        }


@dataclass(frozen=True)
class OnlineAttendanceEntry:
    """Domain entity: attendance at one online meeting on one day."""

    id: int
    trainee_pk: int
    date: date
    meeting_name: str
    status: AttendanceStatus
    time_marked: Optional[datetime] = None
    marked_by: Optional[str] = None
    type: OnlineAttendanceType = OnlineAttendanceType.ONLINE_ATTENDANCE
    created_at: Optional[datetime] = None

    @property
    def meeting_key(self) -> str:
        return meeting_key(self.meeting_name)

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "meetingName": self.meeting_name,
            "status": self.status.value,
            "type": self.type.value,
            "timeMarked": isoformat_or_none(self.time_marked),
            "markedBy": self.marked_by,
            "createdAt": isoformat_or_none(self.created_at),
        }


@dataclass(frozen=True)
class TraineeDay:
    """Read-model: one trainee with the entries that fall in a queried date range."""

    trainee: Trainee
    physical: tuple[PhysicalAttendanceEntry, ...] = field(default_factory=tuple)
    online: tuple[OnlineAttendanceEntry, ...] = field(default_factory=tuple)


def meeting_key(name: str) -> str:
    """Case-insensitive identity of a meeting name."""
    return name.strip().lower()
