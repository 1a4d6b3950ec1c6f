from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Sequence
from zoneinfo import ZoneInfo

from ..attendance.model import OnlineAttendanceEntry
from ..common.datetime_utils import local_day, now_local
from ..common.validators import require_enum, require_non_empty
from ..core.enums import AttendanceStatus, MarkedBy, OnlineAttendanceType
from ..core.exceptions import ValidationError
from ..trainees.model import Trainee
from ..trainees.refs import TraineeRef
from ..trainees.service import TraineeService
from .ingestion import parse_teams_rows
from .model import CandidateRecord, OnlineAttendanceRecord
from .repository import OnlineAttendanceRepository

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    success: int = 0
    failed: int = 0
    errors: list[dict] = field(default_factory=list)
    processed_interns: list[dict] = field(default_factory=list)

    def add_error(self, trainee_id: Optional[str], name: Optional[str], error: str) -> None:
        self.failed += 1
        self.errors.append({"traineeId": trainee_id or "N/A", "name": name or "N/A", "error": error})

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "failed": self.failed,
            "errors": list(self.errors),
            "processedInterns": list(self.processed_interns),
        }


class OnlineAttendanceService:
    """Use case: online meeting attendance (Teams report upload and manual marks)."""

    def __init__(self, online: OnlineAttendanceRepository, trainees: TraineeService, *, zone: ZoneInfo):
        self._online = online
        self._trainees = trainees
        self._zone = zone

    def upload_report(
        self,
        rows: Any,
        *,
        meeting_name: str,
        attendance_date: Any = None,
        now: datetime | None = None,
    ) -> BatchResult:
        if not isinstance(rows, list):
            raise ValidationError("Invalid CSV data format. Expected an array of attendance records.")
        meeting_name = require_non_empty(meeting_name, "Meeting name")

        records = parse_teams_rows(rows)
        if not records:
            raise ValidationError("No valid Present records found in the uploaded CSV.")

        day = local_day(attendance_date, self._zone)
        logger.info(
            "Processing Teams report for %r on %s: %d of %d rows present",
            meeting_name, day, len(records), len(rows),
        )
        return self.process_teams_attendance(records, day=day, meeting_name=meeting_name, now=now)

    def process_teams_attendance(
        self,
        records: Sequence[CandidateRecord],
        *,
        day: date,
        meeting_name: str,
        now: datetime | None = None,
    ) -> BatchResult:
        """Upsert Present for each record; failures are collected, never raised."""
        meeting_name = require_non_empty(meeting_name, "Meeting name")
        now = now or now_local(self._zone)
        result = BatchResult()

        for record in records:
            try:
                trainee = self._trainees.find_by_trainee_id(record.trainee_id)
                if not trainee:
                    result.add_error(record.trainee_id, record.name, "Intern not found in database")
                    continue

                self._online.upsert_online(
                    trainee_pk=trainee.id,
                    day=day,
                    meeting_name=meeting_name,
                    status=AttendanceStatus.PRESENT,
                    time_marked=now,
                    marked_by=MarkedBy.CSV_UPLOAD_SYSTEM.value,
                )
                result.success += 1
                result.processed_interns.append(
                    {
                        "traineeId": trainee.trainee_id,
                        "name": trainee.trainee_name,
                        "status": AttendanceStatus.PRESENT.value,
                        "meetingName": meeting_name,
                        "timeMarked": now.isoformat(),
                        "type": OnlineAttendanceType.ONLINE_ATTENDANCE.value,
                        "markedBy": MarkedBy.CSV_UPLOAD_SYSTEM.value,
                    }
                )
            except Exception as e:
                logger.exception("Failed to record online attendance for %s", record.trainee_id)
                result.add_error(record.trainee_id, record.name, str(e))

        logger.info("Teams report for %r: success=%d failed=%d", meeting_name, result.success, result.failed)
        return result

    def mark_manual(
        self,
        ref: TraineeRef,
        *,
        meeting_name: str,
        status: Any,
        attendance_date: Any = None,
        now: datetime | None = None,
    ) -> tuple[Trainee, OnlineAttendanceEntry]:
        meeting_name = require_non_empty(meeting_name, "Meeting name")
        attendance_status = require_enum(status, AttendanceStatus, "status")
        day = local_day(attendance_date, self._zone)
        trainee = self._trainees.resolve(ref)

        entry = self._online.upsert_online(
            trainee_pk=trainee.id,
            day=day,
            meeting_name=meeting_name,
            status=attendance_status,
            time_marked=now or now_local(self._zone),
            marked_by=MarkedBy.MANUAL_SYSTEM.value,
        )
        logger.info(
            "Marked %s %s for meeting %r on %s", trainee.trainee_id, attendance_status.value, meeting_name, day
        )
        return trainee, entry

    def records_for_date(self, attendance_date: Any) -> tuple[date, Sequence[OnlineAttendanceRecord]]:
        if attendance_date in (None, ""):
            raise ValidationError("Date parameter is required")
        day = local_day(attendance_date, self._zone)
        return day, self._online.list_for_date(day)

    def records_for_meeting(
        self,
        meeting_name: str,
        *,
        start_date: Any = None,
        end_date: Any = None,
    ) -> Sequence[OnlineAttendanceRecord]:
        meeting_name = require_non_empty(meeting_name, "Meeting name")
        start = local_day(start_date, self._zone) if start_date else None
        end = local_day(end_date, self._zone) if end_date else None
        if start and end and end < start:
            raise ValidationError("endDate cannot be before startDate")
        return self._online.list_for_meeting(meeting_name, start=start, end=end)
