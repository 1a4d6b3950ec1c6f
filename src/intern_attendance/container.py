from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import get_zone
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .online.mysql_online_repository import MySQLOnlineAttendanceRepository
from .online.repository import OnlineAttendanceRepository
from .online.service import OnlineAttendanceService
from .teams.service import TeamService
from .trainees.mysql_trainee_repository import MySQLTraineeRepository
from .trainees.repository import TraineeRepository
from .trainees.service import TraineeService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    trainees_repo: TraineeRepository
    attendance_repo: AttendanceRepository
    online_repo: OnlineAttendanceRepository

    trainee_service: TraineeService
    team_service: TeamService
    attendance_service: AttendanceService
    online_attendance_service: OnlineAttendanceService


def assemble(
    *,
    trainees_repo: TraineeRepository,
    attendance_repo: AttendanceRepository,
    online_repo: OnlineAttendanceRepository,
    timezone: str = DEFAULT_TIMEZONE,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    zone = get_zone(timezone)

    trainee_service = TraineeService(trainees_repo)
    team_service = TeamService(trainees_repo, trainee_service)
    attendance_service = AttendanceService(attendance_repo, online_repo, trainee_service, zone=zone)
    online_attendance_service = OnlineAttendanceService(online_repo, trainee_service, zone=zone)

    return Container(
        conn=conn,
        trainees_repo=trainees_repo,
        attendance_repo=attendance_repo,
        online_repo=online_repo,
        trainee_service=trainee_service,
        team_service=team_service,
        attendance_service=attendance_service,
        online_attendance_service=online_attendance_service,
    )


def build_container(*, db_config: dict, timezone: str = DEFAULT_TIMEZONE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        trainees_repo=MySQLTraineeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        online_repo=MySQLOnlineAttendanceRepository(conn),
        timezone=timezone,
        conn=conn,
    )
