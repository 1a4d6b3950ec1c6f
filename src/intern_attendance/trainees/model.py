from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import Weekday


@dataclass(frozen=True)
class Trainee:
    """Domain entity: a trainee (intern).

    ``id`` is the internal key; ``trainee_id`` is the external, globally unique
    identifier used by intake systems and meeting rosters.
    """

    id: int
    trainee_id: str
    trainee_name: str
    field_of_specialization: str
    home_address: str = ""
    training_start_date: Optional[date] = None
    training_end_date: Optional[date] = None
    institute: str = ""
    team: str = ""
    email: str = ""
    available_days: tuple[Weekday, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "traineeId": self.trainee_id,
            "traineeName": self.trainee_name,
            "fieldOfSpecialization": self.field_of_specialization,
            "homeAddress": self.home_address,
            "trainingStartDate": isoformat_or_none(self.training_start_date),
            "trainingEndDate": isoformat_or_none(self.training_end_date),
            "institute": self.institute,
            "team": self.team,
            "email": self.email,
            "availableDays": [d.value for d in self.available_days],
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
