from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import auth_required
from ..common.pagination import parse_page_args
from ..container import Container
from ..core.constants import DEFAULT_API_PAGE_LIMIT


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.session_validator)
    service = container.dashboard_service

    @app.get("/api/dashboard/stats", endpoint="dashboard_stats")
    @login_required
    def stats():
        return jsonify(service.stats().to_json())

    @app.get("/api/dashboard/activities", endpoint="dashboard_activities")
    @login_required
    def activities():
        page, limit = parse_page_args(
            request.args.get("page"), request.args.get("limit"), default_limit=DEFAULT_API_PAGE_LIMIT
        )
        return jsonify(service.activities_to_json(service.activities(page=page, limit=limit)))
