from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_str, require_enum, require_non_empty
from ..core.enums import Weekday
from ..core.exceptions import NotFoundError, ValidationError
from .model import Trainee
from .refs import ByExternalId, ByInternalId, TraineeRef
from .repository import TraineeRepository

logger = logging.getLogger(__name__)

# request field -> column
PROFILE_FIELDS = {
    "traineeName": "trainee_name",
    "fieldOfSpecialization": "field_of_specialization",
    "homeAddress": "home_address",
    "trainingStartDate": "training_start_date",
    "trainingEndDate": "training_end_date",
    "institute": "institute",
    "team": "team",
    "email": "email",
}

DATE_COLUMNS = {"training_start_date", "training_end_date"}
REQUIRED_COLUMNS = {"trainee_name", "field_of_specialization"}


def _optional_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def _check_training_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and end < start:
        raise ValidationError("Training end date cannot be before the start date")


def parse_weekdays(values) -> tuple[Weekday, ...]:
    if values in (None, ""):
        return ()
    if not isinstance(values, (list, tuple)):
        raise ValidationError("availableDays must be a list")
    days: list[Weekday] = []
    for v in values:
        day = require_enum(v, Weekday, "day")
        if day not in days:
            days.append(day)
    return tuple(days)


class TraineeService:
    """Use case: trainee intake and profile administration."""

    def __init__(self, trainees: TraineeRepository):
        self._trainees = trainees

    def resolve(self, ref: TraineeRef) -> Trainee:
        """The single lookup for a trainee reference; raises NotFoundError."""
        if isinstance(ref, ByInternalId):
            trainee = self._trainees.get_by_id(ref.id)
        elif isinstance(ref, ByExternalId):
            trainee = self._trainees.get_by_trainee_id(ref.trainee_id)
        else:
            raise TypeError(f"Unsupported trainee reference: {ref!r}")

        if not trainee:
            raise NotFoundError(f"Intern not found for {ref}")
        return trainee

    def find_by_trainee_id(self, trainee_id: str) -> Optional[Trainee]:
        return self._trainees.get_by_trainee_id(trainee_id.strip())

    def list_all(self) -> Sequence[Trainee]:
        return self._trainees.list_all()

    def add(self, data: dict) -> Trainee:
        trainee_id = require_non_empty(data.get("traineeId"), "Trainee ID")
        trainee_name = require_non_empty(data.get("traineeName"), "Trainee name")
        specialization = require_non_empty(data.get("fieldOfSpecialization"), "Field of specialization")
        start = _optional_date(data.get("trainingStartDate"))
        end = _optional_date(data.get("trainingEndDate"))
        _check_training_range(start, end)

        if self._trainees.get_by_trainee_id(trainee_id):
            raise ValidationError(f"Trainee ID already exists: {trainee_id}")

        new_id = self._trainees.create(
            trainee_id=trainee_id,
            trainee_name=trainee_name,
            field_of_specialization=specialization,
            home_address=optional_str(data.get("homeAddress")),
            training_start_date=start,
            training_end_date=end,
            institute=optional_str(data.get("institute")),
            team=optional_str(data.get("team")),
            email=optional_str(data.get("email")),
            available_days=parse_weekdays(data.get("availableDays")),
        )
        logger.info("Added trainee %s (id=%s)", trainee_id, new_id)
        return self.resolve(ByInternalId(new_id))

    def update(self, ref: TraineeRef, data: dict) -> Trainee:
        trainee = self.resolve(ref)

        if "traineeId" in data and data["traineeId"] != trainee.trainee_id:
            raise ValidationError("Trainee ID cannot be changed")

        changes: dict = {}
        for field_name, column in PROFILE_FIELDS.items():
            if field_name not in data:
                continue
            value = data[field_name]
            if column in DATE_COLUMNS:
                changes[column] = _optional_date(value)
            elif column in REQUIRED_COLUMNS:
                changes[column] = require_non_empty(value, field_name)
            else:
                changes[column] = optional_str(value)

        _check_training_range(
            changes.get("training_start_date", trainee.training_start_date),
            changes.get("training_end_date", trainee.training_end_date),
        )

        if changes:
            self._trainees.update(trainee.id, changes)
        if "availableDays" in data:
            self._trainees.set_available_days(trainee.id, parse_weekdays(data["availableDays"]))

        return self.resolve(ByInternalId(trainee.id))

    def update_email(self, trainee_id: str, email: str) -> Trainee:
        trainee = self.resolve(ByExternalId(require_non_empty(trainee_id, "Trainee ID")))
        email = require_non_empty(email, "Email")
        if "@" not in email:
            raise ValidationError(f"Invalid email: {email}")
        self._trainees.update(trainee.id, {"email": email})
        return self.resolve(ByInternalId(trainee.id))

    def delete(self, ref: TraineeRef) -> Trainee:
        trainee = self.resolve(ref)
        if not self._trainees.delete_by_id(trainee.id):
            raise NotFoundError(f"Intern not found for {ref}")
        logger.info("Deleted trainee %s (id=%s)", trainee.trainee_id, trainee.id)
        return trainee

    def add_available_day(self, ref: TraineeRef, day: str) -> Trainee:
        weekday = require_enum(day, Weekday, "day")
        trainee = self.resolve(ref)
        if weekday not in trainee.available_days:
            self._trainees.set_available_days(trainee.id, trainee.available_days + (weekday,))
        return self.resolve(ByInternalId(trainee.id))

    def remove_available_day(self, ref: TraineeRef, day: str) -> Trainee:
        weekday = require_enum(day, Weekday, "day")
        trainee = self.resolve(ref)
        remaining = tuple(d for d in trainee.available_days if d != weekday)
        if remaining != trainee.available_days:
            self._trainees.set_available_days(trainee.id, remaining)
        return self.resolve(ByInternalId(trainee.id))
