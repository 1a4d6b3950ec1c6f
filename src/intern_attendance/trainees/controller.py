from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, json_errors
from ..container import Container
from .refs import ByInternalId

PREFIX = "/api/interns"


def register(app: Flask, container: Container) -> None:
    service = container.trainee_service

    @app.route(PREFIX, methods=["GET"], endpoint="interns_list")
    @json_errors("Error fetching interns")
    def list_interns():
        date_s = request.args.get("date")
        if not date_s:
            return jsonify([t.to_dict() for t in service.list_all()])

        rows = []
        for trainee, status in container.attendance_service.trainees_with_status(date_s):
            d = trainee.to_dict()
            d["attendanceStatus"] = status.value
            rows.append(d)
        return jsonify(rows)

    @app.route(PREFIX, methods=["POST"], endpoint="interns_add")
    @json_errors("Error adding intern")
    def add_intern():
        trainee = service.add(json_body())
        return jsonify(trainee.to_dict()), 201

    @app.route(f"{PREFIX}/<int:intern_id>", methods=["GET"], endpoint="interns_get")
    @json_errors("Error fetching intern")
    def get_intern(intern_id: int):
        trainee, physical, online = container.attendance_service.history_for(ByInternalId(intern_id))
        d = trainee.to_dict()
        d["attendance"] = [e.to_dict() for e in physical]
        d["onlineAttendance"] = [e.to_dict() for e in online]
        return jsonify(d)

    @app.route(f"{PREFIX}/<int:intern_id>", methods=["PUT"], endpoint="interns_update")
    @json_errors("Error updating intern")
    def update_intern(intern_id: int):
        trainee = service.update(ByInternalId(intern_id), json_body())
        return jsonify(trainee.to_dict())

    @app.route(f"{PREFIX}/<int:intern_id>", methods=["DELETE"], endpoint="interns_delete")
    @json_errors("Error deleting intern")
    def delete_intern(intern_id: int):
        trainee = service.delete(ByInternalId(intern_id))
        return jsonify({"message": "Intern removed successfully", "traineeId": trainee.trainee_id})

    @app.route(f"{PREFIX}/<int:intern_id>/available-days", methods=["POST"], endpoint="interns_add_day")
    @json_errors("Error adding available day")
    def add_available_day(intern_id: int):
        trainee = service.add_available_day(ByInternalId(intern_id), json_body().get("day"))
        return jsonify(trainee.to_dict())

    @app.route(
        f"{PREFIX}/<int:intern_id>/available-days/<day>", methods=["DELETE"], endpoint="interns_remove_day"
    )
    @json_errors("Error removing available day")
    def remove_available_day(intern_id: int, day: str):
        trainee = service.remove_available_day(ByInternalId(intern_id), day)
        return jsonify(trainee.to_dict())

    @app.route(f"{PREFIX}/by-trainee/<trainee_id>/email", methods=["PATCH"], endpoint="interns_update_email")
    @json_errors("Error updating intern email")
    def update_email(trainee_id: str):
        trainee = service.update_email(trainee_id, json_body().get("email"))
        return jsonify(trainee.to_dict())
