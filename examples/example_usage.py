"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib

from intern_attendance.config import get_settings_module
from intern_attendance.container import build_container
from intern_attendance.trainees.refs import ByExternalId


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.TIMEZONE)

    result = container.online_attendance_service.upload_report(
        [
            {"Full Name": "Nimal Perera_TR001", "User Action": "Joined"},
            {"Full Name": "Kavindi Silva_TR002", "User Action": "Joined before"},
        ],
        meeting_name="Daily Standup",
    )
    print(result.to_dict())

    container.attendance_service.mark_physical(ByExternalId("TR003"), status="Present", attendance_type="daily_qr")
    print(container.attendance_service.day_statistics())


if __name__ == "__main__":
    main()
