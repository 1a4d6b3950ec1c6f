from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus, PhysicalAttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..online.mysql_online_repository import row_to_online_entry
from ..trainees.mysql_trainee_repository import TRAINEE_COLUMNS, row_to_trainee
from .model import PhysicalAttendanceEntry, TraineeDay
from .repository import AttendanceRepository

PHYSICAL_COLUMNS = """
    id, trainee_pk, attendance_date, attendance_type, status,
    time_marked, marked_by, session_id, created_at
"""


def row_to_physical_entry(r: Dict[str, Any]) -> PhysicalAttendanceEntry:
    return PhysicalAttendanceEntry(
        id=int(r["id"]),
        trainee_pk=int(r["trainee_pk"]),
        date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        type=PhysicalAttendanceType(r["attendance_type"]),
        time_marked=r.get("time_marked"),
        marked_by=r.get("marked_by"),
        session_id=r.get("session_id"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            # One statement against uq_physical_day_type, so concurrent marks cannot duplicate.
            cur.execute(
                """
                INSERT INTO physical_attendance(
                    trainee_pk, attendance_date, attendance_type, status, time_marked, marked_by, session_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    time_marked=VALUES(time_marked),
                    marked_by=VALUES(marked_by),
                    session_id=COALESCE(VALUES(session_id), session_id)
                """,
                (int(trainee_pk), day, attendance_type.value, status.value, time_marked, marked_by, session_id),
            )
            cur.execute(
                f"""
                SELECT {PHYSICAL_COLUMNS}
                FROM physical_attendance
                WHERE trainee_pk=%s AND attendance_date=%s AND attendance_type=%s
                """,
                (int(trainee_pk), day, attendance_type.value),
            )
            return row_to_physical_entry(fetchone(cur))

    def list_physical_for_trainee(self, trainee_pk: int) -> Sequence[PhysicalAttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {PHYSICAL_COLUMNS}
                FROM physical_attendance
                WHERE trainee_pk=%s
                ORDER BY attendance_date, id
                """,
                (int(trainee_pk),),
            )
            return [row_to_physical_entry(r) for r in fetchall(cur)]

    def get_snapshots(self, *, start: date, end: date) -> Sequence[TraineeDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {TRAINEE_COLUMNS} FROM trainees ORDER BY trainee_name, id")
            trainees = [row_to_trainee(r) for r in fetchall(cur)]

            cur.execute(
                f"""
                SELECT {PHYSICAL_COLUMNS}
                FROM physical_attendance
                WHERE attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date, id
                """,
                (start, end),
            )
            physical = [row_to_physical_entry(r) for r in fetchall(cur)]

            cur.execute(
                """
                SELECT id, trainee_pk, attendance_date, meeting_name, status, attendance_type,
                       time_marked, marked_by, created_at
                FROM online_attendance
                WHERE attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date, id
                """,
                (start, end),
            )
            online = [row_to_online_entry(r) for r in fetchall(cur)]

        physical_by_pk: dict[int, list] = {}
        for e in physical:
            physical_by_pk.setdefault(e.trainee_pk, []).append(e)
        online_by_pk: dict[int, list] = {}
        for e in online:
            online_by_pk.setdefault(e.trainee_pk, []).append(e)

        return [
            TraineeDay(
                trainee=t,
                physical=tuple(physical_by_pk.get(t.id, ())),
                online=tuple(online_by_pk.get(t.id, ())),
            )
            for t in trainees
        ]
