from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, PhysicalAttendanceType
from .model import PhysicalAttendanceEntry, TraineeDay


class AttendanceRepository(Protocol):
    def upsert_physical(
        self,
        *,
        trainee_pk: int,
        day: date,
        attendance_type: PhysicalAttendanceType,
        status: AttendanceStatus,
        time_marked: datetime,
        marked_by: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> PhysicalAttendanceEntry:
        """Insert the (trainee, day, type) entry or overwrite it if present."""

        raise NotImplementedError

    def list_physical_for_trainee(self, trainee_pk: int) -> Sequence[PhysicalAttendanceEntry]:
        raise NotImplementedError

    def get_snapshots(self, *, start: date, end: date) -> Sequence[TraineeDay]:
        """Every trainee, with physical and online entries dated start..end (inclusive)."""

        raise NotImplementedError
