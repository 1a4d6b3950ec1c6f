from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import local_day, now_local, optional_local_time, week_bounds
from ..common.validators import require_enum
from ..core.enums import AttendanceCategory, AttendanceStatus, DayStatus, PhysicalAttendanceType
from ..core.exceptions import ValidationError
from ..online.repository import OnlineAttendanceRepository
from ..trainees.model import Trainee
from ..trainees.refs import TraineeRef
from ..trainees.service import TraineeService
from . import reconciliation
from .model import PhysicalAttendanceEntry, TraineeDay
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: physical attendance marking and the reconciled daily views."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        online: OnlineAttendanceRepository,
        trainees: TraineeService,
        *,
        zone: ZoneInfo,
    ):
        self._attendance = attendance
        self._online = online
        self._trainees = trainees
        self._zone = zone

    def mark_physical(
        self,
        ref: TraineeRef,
        *,
        status: Any,
        attendance_date: Any = None,
        attendance_type: Any = PhysicalAttendanceType.MANUAL.value,
        time_marked: Optional[str] = None,
        marked_by: Optional[str] = None,
        session_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> tuple[Trainee, PhysicalAttendanceEntry]:
        attendance_status = require_enum(status, AttendanceStatus, "status")
        kind = require_enum(attendance_type or PhysicalAttendanceType.MANUAL.value, PhysicalAttendanceType, "type")
        day = local_day(attendance_date, self._zone)
        marked_at = optional_local_time(time_marked, self._zone) or now or now_local(self._zone)

        trainee = self._trainees.resolve(ref)
        entry = self._attendance.upsert_physical(
            trainee_pk=trainee.id,
            day=day,
            attendance_type=kind,
            status=attendance_status,
            time_marked=marked_at,
            marked_by=(marked_by or "").strip() or None,
            session_id=(session_id or "").strip() or None,
        )
        logger.info("Marked %s %s (%s) on %s", trainee.trainee_id, attendance_status.value, kind.value, day)
        return trainee, entry

    def update_for_date(self, ref: TraineeRef, *, attendance_date: Any, status: Any) -> tuple[Trainee, PhysicalAttendanceEntry]:
        """Administrative correction of a day's manual entry."""
        if attendance_date in (None, ""):
            raise ValidationError("Date is required")
        return self.mark_physical(ref, status=status, attendance_date=attendance_date)

    def history_for(self, ref: TraineeRef) -> tuple[Trainee, Sequence[PhysicalAttendanceEntry], Sequence]:
        trainee = self._trainees.resolve(ref)
        return (
            trainee,
            self._attendance.list_physical_for_trainee(trainee.id),
            self._online.list_for_trainee(trainee.id),
        )

    def snapshots_for(self, day: date) -> Sequence[TraineeDay]:
        return self._attendance.get_snapshots(start=day, end=day)

    def resolve_day(self, value: Any = None) -> date:
        return local_day(value, self._zone)

    def stats_for_day(self, value: Any = None) -> reconciliation.DayCounts:
        return reconciliation.overall_stats(self.snapshots_for(self.resolve_day(value)))

    def stats_by_category(self, value: Any = None) -> reconciliation.CategoryStats:
        return reconciliation.stats_by_category(self.snapshots_for(self.resolve_day(value)))

    def day_statistics(self, value: Any = None) -> dict:
        """Online totals with per-meeting breakdown, plus overall and per-category counts."""
        day = self.resolve_day(value)
        snapshots = self.snapshots_for(day)

        stats = reconciliation.online_stats(snapshots, day).to_dict()
        stats["overall"] = reconciliation.overall_stats(snapshots).to_dict()
        stats["byType"] = reconciliation.stats_by_category(snapshots).to_dict()
        return stats

    def attended_today(self, category: Any = None, value: Any = None) -> list[reconciliation.AttendedTrainee]:
        kind = require_enum(category or AttendanceCategory.ALL.value, AttendanceCategory, "type")
        return reconciliation.attended_listing(self.snapshots_for(self.resolve_day(value)), kind)

    def trainees_with_status(self, value: Any) -> list[tuple[Trainee, DayStatus]]:
        day = self.resolve_day(value)
        return [(d.trainee, reconciliation.overall_status(d)) for d in self.snapshots_for(day)]

    def weekly_summary(self, value: Any = None) -> dict:
        start, end = week_bounds(self.resolve_day(value))
        attended, not_attended = reconciliation.weekly_summary(self._attendance.get_snapshots(start=start, end=end))
        return {
            "weekStart": start.isoformat(),
            "weekEnd": end.isoformat(),
            "attendedInterns": [t.to_dict() for t in attended],
            "notAttendedInterns": [t.to_dict() for t in not_attended],
        }
