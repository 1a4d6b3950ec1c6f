"""Explicit trainee references.

A trainee can be addressed by its internal key or by its external trainee id.
The two are never guessed from one another: callers build the reference they
mean and a single lookup resolves it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ByInternalId:
    id: int

    def __str__(self) -> str:
        return f"id={self.id}"


@dataclass(frozen=True)
class ByExternalId:
    trainee_id: str

    def __str__(self) -> str:
        return f"traineeId={self.trainee_id}"


TraineeRef = Union[ByInternalId, ByExternalId]


def parse_trainee_ref(value) -> TraineeRef:
    """Build a reference from a JSON value: numbers are internal ids, strings external ids."""
    if isinstance(value, bool):
        raise ValidationError("Intern ID is required")
    if isinstance(value, int):
        return ByInternalId(value)
    if isinstance(value, str) and value.strip():
        return ByExternalId(value.strip())
    raise ValidationError("Intern ID is required")


def ref_from_payload(data: dict) -> TraineeRef:
    """Reference from a request body: ``traineeId`` (external) wins over ``internId``."""
    trainee_id = data.get("traineeId")
    if isinstance(trainee_id, str) and trainee_id.strip():
        return ByExternalId(trainee_id.strip())
    return parse_trainee_ref(data.get("internId"))
