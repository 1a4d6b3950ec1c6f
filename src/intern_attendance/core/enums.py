from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "Present"
    ABSENT = "Absent"


class PhysicalAttendanceType(str, Enum):
    """How a physical attendance entry was captured."""

    MANUAL = "manual"
    QR = "qr"
    DAILY_QR = "daily_qr"


class OnlineAttendanceType(str, Enum):
    ONLINE_ATTENDANCE = "online_attendance"


class MarkedBy(str, Enum):
    """Known writers of attendance entries.

    Physical entries may carry any free-text ``marked_by``; these are the
    values the system itself writes or recognises.
    """

    EXTERNAL_SYSTEM = "external_system"
    CSV_UPLOAD_SYSTEM = "csv_upload_system"
    MANUAL_SYSTEM = "manual_system"


class AttendanceCategory(str, Enum):
    DAILY = "daily"
    MEETING = "meeting"
    ALL = "all"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


class DayStatus(str, Enum):
    """A trainee's reconciled status for one day across all sources."""

    PRESENT = "Present"
    ABSENT = "Absent"
    NOT_MARKED = "Not Marked"
