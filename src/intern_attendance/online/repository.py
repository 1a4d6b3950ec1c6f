from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..attendance.model import OnlineAttendanceEntry
from ..core.enums import AttendanceStatus
from .model import OnlineAttendanceRecord


class OnlineAttendanceRepository(Protocol):
    def upsert_online(
        self,
        *,
        trainee_pk: int,
        day: date,
        meeting_name: str,
        status: AttendanceStatus,
        time_marked: datetime,
        marked_by: str,
    ) -> OnlineAttendanceEntry:
        """Insert or overwrite the entry keyed by (trainee, day, lower(meeting_name)).

        An existing entry keeps its stored meeting name spelling.
        """

        raise NotImplementedError

    def list_for_trainee(self, trainee_pk: int) -> Sequence[OnlineAttendanceEntry]:
        raise NotImplementedError

    def list_for_date(self, day: date) -> Sequence[OnlineAttendanceRecord]:
        raise NotImplementedError

    def list_for_meeting(
        self,
        meeting_name: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[OnlineAttendanceRecord]:
        """Entries whose meeting matches case-insensitively, optionally date-bounded (inclusive)."""

        raise NotImplementedError
