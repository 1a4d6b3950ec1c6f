from __future__ import annotations

import pytest

from intern_attendance.online.ingestion import is_present_action, parse_row, parse_teams_rows, split_full_name


def test_split_full_name_takes_second_segment_as_trainee_id():
    assert split_full_name("Kasun Perera_TR001") == ("Kasun Perera", "TR001")
    assert split_full_name("Kasun_TR001_extra") == ("Kasun", "TR001")


def test_split_full_name_without_id_is_unknown():
    assert split_full_name("Kasun Perera") == ("Kasun Perera", "UNKNOWN")
    assert split_full_name("Kasun_ ") == ("Kasun", "UNKNOWN")


@pytest.mark.parametrize("action", ["Joined", "joined the meeting", "PRESENT", "Present in lobby"])
def test_join_and_present_actions_count(action):
    assert is_present_action(action)


@pytest.mark.parametrize("action", ["Left", "", "Declined"])
def test_other_actions_do_not_count(action):
    assert not is_present_action(action)


def test_parse_row_builds_present_candidate():
    record = parse_row({"Full Name": " Nimali_TR002 ", "User Action": "Joined"})
    assert record is not None
    assert record.trainee_id == "TR002"
    assert record.name == "Nimali"
    assert record.status == "Present"


def test_parse_row_drops_unusable_rows():
    assert parse_row({"Full Name": "", "User Action": "Joined"}) is None
    assert parse_row({"Full Name": "Nimali", "User Action": "Joined"}) is None
    assert parse_row({"Full Name": "_TR002", "User Action": "Joined"}) is None
    assert parse_row({"Full Name": "Nimali_TR002", "User Action": "Left"}) is None
    assert parse_row({"Full Name": "Nimali_TR002"}) is None
    assert parse_row("Nimali_TR002,Joined") is None


def test_parse_teams_rows_keeps_only_joins_in_order():
    rows = [
        {"Full Name": "A_TR001", "User Action": "Joined"},
        {"Full Name": "A_TR001", "User Action": "Left"},
        {"Full Name": "B", "User Action": "Joined"},
        {"Full Name": "C_TR003", "User Action": "Joined before"},
        {"Full Name": "A_TR001", "User Action": "Joined"},
    ]
    records = parse_teams_rows(rows)
    assert [r.trainee_id for r in records] == ["TR001", "TR003", "TR001"]
