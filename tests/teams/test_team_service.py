from __future__ import annotations

import pytest

from fakes import add_trainee
from intern_attendance.core.exceptions import NotFoundError, ValidationError
from intern_attendance.trainees.refs import ByExternalId, ByInternalId


@pytest.fixture
def roster(store):
    return [
        add_trainee(store, "TR001", "Amal", team="Platform"),
        add_trainee(store, "TR002", "Bimal", team="Platform"),
        add_trainee(store, "TR003", "Chamal"),
    ]


def test_list_teams_groups_non_empty_teams(container, roster):
    teams = container.team_service.list_teams()
    assert [t.name for t in teams] == ["Platform"]
    assert [m.trainee_id for m in teams[0].members] == ["TR001", "TR002"]


def test_assign_by_mixed_refs(container, roster):
    count = container.team_service.assign([ByInternalId(roster[2].id), ByExternalId("TR001")], "Mobile")
    assert count == 2
    names = {t.name: [m.trainee_id for m in t.members] for t in container.team_service.list_teams()}
    assert names == {"Mobile": ["TR001", "TR003"], "Platform": ["TR002"]}


def test_assign_validation(container, roster):
    with pytest.raises(ValidationError, match="At least one intern"):
        container.team_service.assign([], "Mobile")
    with pytest.raises(ValidationError, match="Team name is required"):
        container.team_service.assign([ByExternalId("TR001")], " ")
    with pytest.raises(NotFoundError):
        container.team_service.assign([ByExternalId("TR404")], "Mobile")


def test_remove_member_clears_team(container, roster):
    trainee = container.team_service.remove_member(ByInternalId(roster[0].id))
    assert trainee.team == ""


def test_rename_team(container, roster):
    result = container.team_service.rename("Platform", "Infra")
    assert result == {"modifiedCount": 2, "message": "Successfully updated 2 interns from Platform to Infra"}
    with pytest.raises(NotFoundError, match="Team not found"):
        container.team_service.rename("Platform", "Infra")


def test_delete_team_unassigns_members(container, roster):
    result = container.team_service.delete("Platform")
    assert result["deletedCount"] == 2
    assert result["message"] == 'Team "Platform" deleted - 2 interns removed'
    assert container.team_service.list_teams() == []
