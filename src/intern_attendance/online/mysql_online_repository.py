from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..attendance.model import OnlineAttendanceEntry, meeting_key
from ..core.enums import AttendanceStatus, OnlineAttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OnlineAttendanceRecord
from .repository import OnlineAttendanceRepository

ONLINE_COLUMNS = """
    o.id, o.trainee_pk, o.attendance_date, o.meeting_name, o.status, o.attendance_type,
    o.time_marked, o.marked_by, o.created_at
"""


def row_to_online_entry(r: Dict[str, Any]) -> OnlineAttendanceEntry:
    return OnlineAttendanceEntry(
        id=int(r["id"]),
        trainee_pk=int(r["trainee_pk"]),
        date=r["attendance_date"],
        meeting_name=r["meeting_name"],
        status=AttendanceStatus(r["status"]),
        time_marked=r.get("time_marked"),
        marked_by=r.get("marked_by"),
        type=OnlineAttendanceType(r.get("attendance_type") or OnlineAttendanceType.ONLINE_ATTENDANCE.value),
        created_at=r.get("created_at"),
    )


def row_to_online_record(r: Dict[str, Any]) -> OnlineAttendanceRecord:
    return OnlineAttendanceRecord(
        trainee_id=r["trainee_id"],
        trainee_name=r["trainee_name"],
        email=r.get("email") or "",
        entry=row_to_online_entry(r),
    )


class MySQLOnlineAttendanceRepository(OnlineAttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        key = meeting_key(meeting_name)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO online_attendance(
                    trainee_pk, attendance_date, meeting_name, meeting_key, status,
                    attendance_type, time_marked, marked_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    attendance_type=VALUES(attendance_type),
                    time_marked=VALUES(time_marked),
                    marked_by=VALUES(marked_by)
                """,
                (
                    int(trainee_pk),
                    day,
                    meeting_name,
                    key,
                    status.value,
                    OnlineAttendanceType.ONLINE_ATTENDANCE.value,
                    time_marked,
                    marked_by,
                ),
            )
            cur.execute(
                f"""
                SELECT {ONLINE_COLUMNS}
                FROM online_attendance o
                WHERE o.trainee_pk=%s AND o.attendance_date=%s AND o.meeting_key=%s
                """,
                (int(trainee_pk), day, key),
            )
            return row_to_online_entry(fetchone(cur))

    def list_for_trainee(self, trainee_pk: int) -> Sequence[OnlineAttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {ONLINE_COLUMNS}
                FROM online_attendance o
                WHERE o.trainee_pk=%s
                ORDER BY o.attendance_date, o.id
                """,
                (int(trainee_pk),),
            )
            return [row_to_online_entry(r) for r in fetchall(cur)]

    def list_for_date(self, day: date) -> Sequence[OnlineAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {ONLINE_COLUMNS}, t.trainee_id, t.trainee_name, t.email
                FROM online_attendance o
                JOIN trainees t ON t.id = o.trainee_pk
                WHERE o.attendance_date=%s
                ORDER BY o.meeting_key, t.trainee_name, o.id
                """,
                (day,),
            )
            return [row_to_online_record(r) for r in fetchall(cur)]

    def list_for_meeting(
        self,
        meeting_name: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[OnlineAttendanceRecord]:
        where = ["o.meeting_key=%s"]
        params: list = [meeting_key(meeting_name)]
        if start:
            where.append("o.attendance_date >= %s")
            params.append(start)
        if end:
            where.append("o.attendance_date <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {ONLINE_COLUMNS}, t.trainee_id, t.trainee_name, t.email
                FROM online_attendance o
                JOIN trainees t ON t.id = o.trainee_pk
                WHERE {" AND ".join(where)}
                ORDER BY o.attendance_date, t.trainee_name, o.id
                """,
                tuple(params),
            )
            return [row_to_online_record(r) for r in fetchall(cur)]
