from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import Trainee


class TraineeRepository(Protocol):
    """Repository interface for trainees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, id: int) -> Optional[Trainee]:
        raise NotImplementedError

    def get_by_trainee_id(self, trainee_id: str) -> Optional[Trainee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Trainee]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, id: int, changes: dict) -> bool:
        """Apply column -> value changes. ``trainee_id`` is never among them."""

        raise NotImplementedError

    def delete_by_id(self, id: int) -> bool:
        raise NotImplementedError

    def set_available_days(self, id: int, days: Sequence[Weekday]) -> bool:
        raise NotImplementedError

    def set_team(self, ids: Sequence[int], team: str) -> int:
        raise NotImplementedError

    def rename_team(self, old_team: str, new_team: str) -> int:
        raise NotImplementedError
