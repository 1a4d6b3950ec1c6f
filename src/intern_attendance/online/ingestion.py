"""Turn rows of a Teams attendance report into candidate Present records.

Only presence is ever derived from a report. Someone missing from the
report, or whose action is not a join, simply produces no record.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..core.constants import (
    CSV_FULL_NAME_FIELD,
    CSV_NAME_SEPARATOR,
    CSV_PRESENT_KEYWORDS,
    CSV_USER_ACTION_FIELD,
    UNKNOWN_TRAINEE_ID,
)
from ..core.enums import AttendanceStatus
from .model import CandidateRecord


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def split_full_name(full_name: str) -> tuple[str, str]:
    """``"Name_TraineeId"`` -> ``("Name", "TraineeId")``; missing id becomes UNKNOWN."""
    parts = full_name.split(CSV_NAME_SEPARATOR)
    name = parts[0].strip()
    trainee_id = parts[1].strip() if len(parts) > 1 else ""
    return name, trainee_id or UNKNOWN_TRAINEE_ID


def is_present_action(action: str) -> bool:
    action = action.lower()
    return any(k in action for k in CSV_PRESENT_KEYWORDS)


def parse_row(row: Mapping[str, Any]) -> Optional[CandidateRecord]:
    if not isinstance(row, Mapping):
        return None

    full_name = _text(row.get(CSV_FULL_NAME_FIELD))
    if not full_name:
        return None

    name, trainee_id = split_full_name(full_name)
    if not name or trainee_id == UNKNOWN_TRAINEE_ID:
        return None
    if not is_present_action(_text(row.get(CSV_USER_ACTION_FIELD))):
        return None

    return CandidateRecord(trainee_id=trainee_id, name=name, status=AttendanceStatus.PRESENT.value)


def parse_teams_rows(rows: Iterable[Mapping[str, Any]]) -> list[CandidateRecord]:
    """Candidates in input order; one per qualifying row (duplicates are reconciled later)."""
    out: list[CandidateRecord] = []
    for row in rows:
        record = parse_row(row)
        if record:
            out.append(record)
    return out
