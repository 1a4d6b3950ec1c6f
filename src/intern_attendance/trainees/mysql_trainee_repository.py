from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, row_exists
from .model import Trainee
from .repository import TraineeRepository

TRAINEE_COLUMNS = """
    id, trainee_id, trainee_name, field_of_specialization, home_address,
    training_start_date, training_end_date, institute, team, email,
    available_days, created_at, updated_at
"""

# Columns an update may touch; trainee_id is immutable.
UPDATABLE_COLUMNS = {
    "trainee_name",
    "field_of_specialization",
    "home_address",
    "training_start_date",
    "training_end_date",
    "institute",
    "team",
    "email",
}


def encode_days(days: Sequence[Weekday]) -> str:
    return ",".join(d.value for d in days)


def decode_days(value: Optional[str]) -> tuple[Weekday, ...]:
    if not value:
        return ()
    return tuple(Weekday(v) for v in value.split(",") if v)


def row_to_trainee(r: Dict[str, Any]) -> Trainee:
    return Trainee(
        id=int(r["id"]),
        trainee_id=r["trainee_id"],
        trainee_name=r["trainee_name"],
        field_of_specialization=r["field_of_specialization"],
        home_address=r.get("home_address") or "",
        training_start_date=r.get("training_start_date"),
        training_end_date=r.get("training_end_date"),
        institute=r.get("institute") or "",
        team=r.get("team") or "",
        email=r.get("email") or "",
        available_days=decode_days(r.get("available_days")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTraineeRepository(TraineeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, id: int) -> Optional[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {TRAINEE_COLUMNS} FROM trainees WHERE id=%s", (int(id),))
            row = fetchone(cur)
            return row_to_trainee(row) if row else None

    def get_by_trainee_id(self, trainee_id: str) -> Optional[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {TRAINEE_COLUMNS} FROM trainees WHERE trainee_id=%s", (trainee_id,))
            row = fetchone(cur)
            return row_to_trainee(row) if row else None

    def list_all(self) -> Sequence[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {TRAINEE_COLUMNS} FROM trainees ORDER BY trainee_name, id")
            return [row_to_trainee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        trainee_id: str,
        trainee_name: str,
        field_of_specialization: str,
        home_address: str = "",
        training_start_date=None,
        training_end_date=None,
        institute: str = "",
        team: str = "",
        email: str = "",
        available_days: Sequence[Weekday] = (),
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO trainees(
                    trainee_id, trainee_name, field_of_specialization, home_address,
                    training_start_date, training_end_date, institute, team, email, available_days
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    trainee_id,
                    trainee_name,
                    field_of_specialization,
                    home_address,
                    training_start_date,
                    training_end_date,
                    institute,
                    team,
                    email,
                    encode_days(available_days),
                ),
            )
            return int(cur.lastrowid)

    def update(self, id: int, changes: dict) -> bool:
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")
        if not changes:
            return self.get_by_id(id) is not None

        columns = sorted(changes)
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE trainees SET {assignments} WHERE id=%s",
                tuple(changes[c] for c in columns) + (int(id),),
            )
            # rowcount is 0 when values are unchanged, so check existence instead.
            return row_exists(cur, "trainees", "id", int(id))

    def delete_by_id(self, id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM trainees WHERE id=%s", (int(id),))
            return cur.rowcount > 0

    def set_available_days(self, id: int, days: Sequence[Weekday]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE trainees SET available_days=%s WHERE id=%s", (encode_days(days), int(id)))
            return row_exists(cur, "trainees", "id", int(id))

    def set_team(self, ids: Sequence[int], team: str) -> int:
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE trainees SET team=%s WHERE id IN ({in_clause(ids)})",
                (team,) + tuple(int(i) for i in ids),
            )
            return int(cur.rowcount)

    def rename_team(self, old_team: str, new_team: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE trainees SET team=%s WHERE team=%s", (new_team, old_team))
            return int(cur.rowcount)
