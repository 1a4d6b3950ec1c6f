from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import json_body, json_errors
from ..container import Container
from ..core.constants import EXCEL_MIMETYPE
from ..trainees.refs import ref_from_payload
from .export import records_to_xlsx

PREFIX = "/api/online-attendance"


def register(app: Flask, container: Container) -> None:
    service = container.online_attendance_service

    @app.route(f"{PREFIX}/upload", methods=["POST"], endpoint="online_upload")
    @json_errors("Error processing attendance report")
    def upload_teams_report():
        data = json_body()
        meeting_name = data.get("meetingName")
        result = service.upload_report(
            data.get("csvData"),
            meeting_name=meeting_name,
            attendance_date=data.get("date"),
        )
        body = {"message": "Online attendance processed successfully", "meetingName": meeting_name.strip()}
        body.update(result.to_dict())
        return jsonify(body), 200

    @app.route(f"{PREFIX}/date", methods=["GET"], endpoint="online_by_date")
    @json_errors("Error fetching attendance records")
    def attendance_by_date():
        day, records = service.records_for_date(request.args.get("date"))
        return jsonify(
            {
                "date": day.isoformat(),
                "totalRecords": len(records),
                "records": [r.to_dict() for r in records],
            }
        )

    @app.route(f"{PREFIX}/stats", methods=["GET"], endpoint="online_stats")
    @json_errors("Error fetching attendance statistics")
    def attendance_stats():
        return jsonify(container.attendance_service.day_statistics(request.args.get("date")))

    @app.route(f"{PREFIX}/mark", methods=["POST"], endpoint="online_mark")
    @json_errors("Error marking attendance")
    def mark_manual_attendance():
        data = json_body()
        trainee, entry = service.mark_manual(
            ref_from_payload(data),
            meeting_name=data.get("meetingName"),
            status=data.get("status"),
            attendance_date=data.get("date"),
        )
        return jsonify(
            {
                "message": "Online attendance marked successfully",
                "id": entry.id,
                "internId": trainee.trainee_id,
                "meetingName": entry.meeting_name,
                "status": entry.status.value,
                "date": entry.date.isoformat(),
                "timeMarked": entry.time_marked.isoformat() if entry.time_marked else None,
                "type": entry.type.value,
                "markedBy": entry.marked_by,
                "createdAt": entry.created_at.isoformat() if entry.created_at else None,
            }
        )

    @app.route(f"{PREFIX}/meeting", methods=["GET"], endpoint="online_by_meeting")
    @json_errors("Error fetching attendance by meeting")
    def attendance_by_meeting():
        meeting_name = request.args.get("meetingName", "")
        records = service.records_for_meeting(
            meeting_name,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return jsonify(
            {
                "meetingName": meeting_name.strip(),
                "totalRecords": len(records),
                "records": [r.to_dict() for r in records],
            }
        )

    @app.route(f"{PREFIX}/meeting/export", methods=["GET"], endpoint="online_meeting_export")
    @json_errors("Error exporting attendance by meeting")
    def export_meeting_attendance():
        meeting_name = request.args.get("meetingName", "")
        records = service.records_for_meeting(
            meeting_name,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        safe_name = "".join(c if c.isalnum() else "_" for c in meeting_name.strip()) or "meeting"
        return send_file(
            records_to_xlsx(records, sheet_name=safe_name),
            download_name=f"{safe_name}_attendance.xlsx",
            as_attachment=True,
            mimetype=EXCEL_MIMETYPE,
        )
