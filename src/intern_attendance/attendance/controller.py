from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, json_errors
from ..container import Container
from ..core.enums import AttendanceCategory
from ..trainees.refs import ByInternalId, ref_from_payload

PREFIX = "/api/interns"


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route(f"{PREFIX}/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @json_errors("Error marking attendance")
    def mark_attendance():
        data = json_body()
        trainee, entry = service.mark_physical(
            ref_from_payload(data),
            status=data.get("status"),
            attendance_date=data.get("date"),
            attendance_type=data.get("type"),
            time_marked=data.get("timeMarked"),
            marked_by=data.get("markedBy"),
            session_id=data.get("sessionId"),
        )
        return jsonify(
            {
                "message": "Attendance marked successfully",
                "internId": trainee.id,
                "traineeId": trainee.trainee_id,
                "attendance": entry.to_dict(),
            }
        )

    @app.route(f"{PREFIX}/<int:intern_id>/attendance", methods=["PUT"], endpoint="attendance_update_for_date")
    @json_errors("Error updating attendance")
    def update_attendance_for_date(intern_id: int):
        data = json_body()
        trainee, entry = service.update_for_date(
            ByInternalId(intern_id),
            attendance_date=data.get("date"),
            status=data.get("status"),
        )
        return jsonify(
            {
                "message": "Attendance updated successfully",
                "internId": trainee.id,
                "traineeId": trainee.trainee_id,
                "attendance": entry.to_dict(),
            }
        )

    @app.route(f"{PREFIX}/attendance/stats/today", methods=["GET"], endpoint="attendance_stats_today")
    @json_errors("Error fetching attendance stats for today")
    def stats_today():
        return jsonify(service.stats_for_day(request.args.get("date")).to_dict())

    @app.route(f"{PREFIX}/attendance/stats/by-type", methods=["GET"], endpoint="attendance_stats_by_type")
    @json_errors("Error fetching attendance stats by type")
    def stats_by_type():
        stats = service.stats_by_category(request.args.get("date"))
        kind = request.args.get("type")
        if kind == AttendanceCategory.DAILY.value:
            return jsonify(stats.daily.to_dict())
        if kind == AttendanceCategory.MEETING.value:
            return jsonify(stats.meeting.to_dict())
        return jsonify(stats.to_dict())

    @app.route(f"{PREFIX}/attendance/today", methods=["GET"], endpoint="attendance_today")
    @json_errors("Error fetching today's attendance by type")
    def attended_today():
        listing = service.attended_today(request.args.get("type"), request.args.get("date"))
        return jsonify([row.to_dict() for row in listing])

    @app.route(f"{PREFIX}/attendance/weekly", methods=["GET"], endpoint="attendance_weekly")
    @json_errors("Error fetching weekly attendance stats")
    def weekly():
        return jsonify(service.weekly_summary(request.args.get("date")))
