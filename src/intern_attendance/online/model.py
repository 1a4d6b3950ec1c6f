from __future__ import annotations

from dataclasses import dataclass

from ..attendance.model import OnlineAttendanceEntry


@dataclass(frozen=True)
class OnlineAttendanceRecord:
    """Read-model: an online entry joined with the trainee it belongs to."""

    trainee_id: str
    trainee_name: str
    email: str
    entry: OnlineAttendanceEntry

    def to_dict(self) -> dict:
        e = self.entry
        return {
            "traineeId": self.trainee_id,
            "traineeName": self.trainee_name,
            "email": self.email,
            "meetingName": e.meeting_name,
            "date": e.date.isoformat(),
            "timeMarked": e.time_marked.isoformat() if e.time_marked else None,
            "status": e.status.value,
            "type": e.type.value,
            "markedBy": e.marked_by or "unknown",
        }


@dataclass(frozen=True)
class CandidateRecord:
    """A CSV row that survived ingestion: someone who joined the meeting."""

    trainee_id: str
    name: str
    status: str = "Present"
