from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..trainees.model import Trainee
from ..trainees.refs import TraineeRef
from ..trainees.repository import TraineeRepository
from ..trainees.service import TraineeService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Team:
    name: str
    members: tuple[Trainee, ...]

    def to_dict(self) -> dict:
        return {"name": self.name, "members": [m.to_dict() for m in self.members]}


class TeamService:
    """Use case: group trainees into teams.

    A team has no row of its own; it is the set of trainees sharing a
    non-empty ``team`` value.
    """

    def __init__(self, trainees: TraineeRepository, trainee_service: TraineeService):
        self._trainees = trainees
        self._trainee_service = trainee_service

    def list_teams(self) -> list[Team]:
        grouped: dict[str, list[Trainee]] = {}
        for t in self._trainees.list_all():
            if t.team:
                grouped.setdefault(t.team, []).append(t)
        return [Team(name=name, members=tuple(members)) for name, members in sorted(grouped.items())]

    def assign(self, refs: Sequence[TraineeRef], team_name: str) -> int:
        team_name = require_non_empty(team_name, "Team name")
        if not refs:
            raise ValidationError("At least one intern is required")
        ids = [self._trainee_service.resolve(ref).id for ref in refs]
        count = self._trainees.set_team(ids, team_name)
        logger.info("Assigned %d trainee(s) to team %r", len(ids), team_name)
        return count

    def assign_single(self, ref: TraineeRef, team_name: str) -> Trainee:
        self.assign([ref], team_name)
        return self._trainee_service.resolve(ref)

    def remove_member(self, ref: TraineeRef) -> Trainee:
        trainee = self._trainee_service.resolve(ref)
        self._trainees.set_team([trainee.id], "")
        return self._trainee_service.resolve(ref)

    def rename(self, old_name: str, new_name: str) -> dict:
        old_name = require_non_empty(old_name, "Team name")
        new_name = require_non_empty(new_name, "New team name")
        self._require_team(old_name)
        modified = self._trainees.rename_team(old_name, new_name)
        return {
            "modifiedCount": modified,
            "message": f"Successfully updated {modified} interns from {old_name} to {new_name}",
        }

    def delete(self, team_name: str) -> dict:
        team_name = require_non_empty(team_name, "Team name")
        self._require_team(team_name)
        removed = self._trainees.rename_team(team_name, "")
        return {
            "deletedCount": removed,
            "message": f'Team "{team_name}" deleted - {removed} interns removed',
        }

    def _require_team(self, name: str) -> None:
        if not any(t.team == name for t in self._trainees.list_all()):
            raise NotFoundError(f"Team not found: {name}")
