from __future__ import annotations

from datetime import date, datetime

import pytest

from fakes import InMemoryAttendance, InMemoryOnline, InMemoryStore, InMemoryTrainees
from intern_attendance.container import assemble


@pytest.fixture
def day() -> date:
    return date(2026, 2, 2)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 15, 0)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store):
    return assemble(
        trainees_repo=InMemoryTrainees(store),
        attendance_repo=InMemoryAttendance(store),
        online_repo=InMemoryOnline(store),
        timezone="Asia/Colombo",
    )


@pytest.fixture
def client(container, monkeypatch):
    from intern_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
