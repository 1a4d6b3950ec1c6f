from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, json_errors
from ..container import Container
from ..core.exceptions import ValidationError
from ..trainees.refs import ByInternalId, parse_trainee_ref

PREFIX = "/api/teams"


def register(app: Flask, container: Container) -> None:
    service = container.team_service

    @app.route(PREFIX, methods=["GET"], endpoint="teams_list")
    @json_errors("Error fetching teams")
    def list_teams():
        return jsonify([team.to_dict() for team in service.list_teams()])

    @app.route(f"{PREFIX}/assign", methods=["POST"], endpoint="teams_assign")
    @json_errors("Error assigning interns to team")
    def assign_to_team():
        data = json_body()
        intern_ids = data.get("internIds")
        if not isinstance(intern_ids, list):
            raise ValidationError("internIds must be a list")
        count = service.assign([parse_trainee_ref(v) for v in intern_ids], data.get("teamName"))
        return jsonify({"message": "Interns assigned to team successfully", "modifiedCount": count})

    @app.route(f"{PREFIX}/<team_name>/members/<int:intern_id>", methods=["POST"], endpoint="teams_assign_single")
    @json_errors("Error assigning intern to team")
    def assign_single(team_name: str, intern_id: int):
        trainee = service.assign_single(ByInternalId(intern_id), team_name)
        return jsonify(trainee.to_dict())

    @app.route(f"{PREFIX}/members/<int:intern_id>", methods=["DELETE"], endpoint="teams_remove_member")
    @json_errors("Error removing intern from team")
    def remove_member(intern_id: int):
        trainee = service.remove_member(ByInternalId(intern_id))
        return jsonify(trainee.to_dict())

    @app.route(f"{PREFIX}/<team_name>", methods=["PUT"], endpoint="teams_rename")
    @json_errors("Error updating team name")
    def rename_team(team_name: str):
        return jsonify(service.rename(team_name, json_body().get("newTeamName")))

    @app.route(f"{PREFIX}/<team_name>", methods=["DELETE"], endpoint="teams_delete")
    @json_errors("Error deleting team")
    def delete_team(team_name: str):
        return jsonify(service.delete(team_name))
