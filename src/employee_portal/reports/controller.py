from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import auth_required, current_user
from ..common.http import json_body
from ..common.pagination import parse_page_args
from ..container import Container
from ..core.constants import DEFAULT_API_PAGE_LIMIT
from .service import NewWorkReport, changes_from_payload, report_row_to_json, report_to_json


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.session_validator)
    service = container.report_service

    @app.get("/api/reports", endpoint="reports")
    @login_required
    def list_reports():
        page, limit = parse_page_args(
            request.args.get("page"), request.args.get("limit"), default_limit=DEFAULT_API_PAGE_LIMIT
        )
        user = current_user()
        result = service.list_for_user(user.id, page=page, limit=limit)
        return jsonify(
            {
                "reports": [report_row_to_json(r, user.display_name) for r in result.items],
                "totalCount": result.total_count,
            }
        )

    @app.get("/api/reports/<int:report_id>", endpoint="report_detail")
    @login_required
    def report_detail(report_id: int):
        report = service.get(report_id, current_user())
        return jsonify(report_to_json(report, service.author_name(report)))

    @app.post("/api/reports", endpoint="submit_report")
    @login_required
    def submit_report():
        report = service.submit(current_user().id, NewWorkReport.from_payload(json_body()))
        return (
            jsonify(
                {
                    "id": report.report_id,
                    "title": report.title,
                    "status": report.status.value,
                    "message": "Work report submitted successfully",
                }
            ),
            201,
        )

    @app.patch("/api/reports/<int:report_id>", endpoint="update_report")
    @login_required
    def update_report(report_id: int):
        report = service.update(report_id, changes_from_payload(json_body()), current_user())
        return jsonify(report_to_json(report, service.author_name(report)))
