from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import auth_required, current_user
from ..common.datetime_utils import format_time, working_hours
from ..common.http import json_body
from ..common.pagination import parse_page_args
from ..common.validators import optional_text
from ..container import Container
from ..core.constants import DEFAULT_API_PAGE_LIMIT
from ..core.enums import AttendanceType
from ..core.exceptions import ValidationError
from .service import history_row_to_json


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.session_validator)
    service = container.attendance_service

    @app.get("/api/attendance/location", endpoint="attendance_location")
    @login_required
    def location():
        return jsonify({"location": service.location})

    @app.get("/api/attendance/today", endpoint="attendance_today")
    @login_required
    def today():
        status = service.today_status(current_user().id)
        return jsonify(
            {
                "checkInTime": status.check_in_time,
                "checkOutTime": status.check_out_time,
                "workingHours": status.working_hours,
                "status": status.status,
            }
        )

    @app.get("/api/attendance/history", endpoint="attendance_history")
    @login_required
    def history():
        page, limit = parse_page_args(
            request.args.get("page"), request.args.get("limit"), default_limit=DEFAULT_API_PAGE_LIMIT
        )
        result = service.history(current_user().id, page=page, limit=limit)
        return jsonify({"records": [history_row_to_json(r) for r in result.items], "totalCount": result.total_count})

    @app.post("/api/attendance", endpoint="record_attendance")
    @login_required
    def record_attendance():
        data = json_body()
        try:
            kind = AttendanceType(data.get("attendanceType"))
        except ValueError:
            raise ValidationError("Invalid attendance type")
        note = optional_text(data.get("note"), "note")
        user_id = current_user().id

        if kind == AttendanceType.CHECK_IN:
            record = service.check_in(user_id, note=note)
            return (
                jsonify(
                    {
                        "id": record.attendance_id,
                        "checkInTime": format_time(record.check_in),
                        "message": "Check-in successful",
                    }
                ),
                201,
            )

        record = service.check_out(user_id, note=note)
        return jsonify(
            {
                "id": record.attendance_id,
                "checkOutTime": format_time(record.check_out),
                "workingHours": working_hours(record.check_in, record.check_out),
                "message": "Check-out successful",
            }
        )
