from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import auth_required, current_user
from ..common.http import json_body
from ..common.pagination import parse_page_args
from ..common.validators import require_date
from ..container import Container
from ..core.constants import DEFAULT_API_PAGE_LIMIT
from .service import (
    SaleRequest,
    daily_stats_to_json,
    recorded_sale_to_json,
    sale_detail_to_json,
    sale_row_to_json,
)


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.session_validator)
    service = container.sale_service

    @app.get("/api/sales/daily-stats", endpoint="sales_daily_stats")
    @login_required
    def daily_stats():
        raw = request.args.get("date")
        day = require_date(raw, "date") if raw else None
        return jsonify(daily_stats_to_json(service.daily_stats(day)))

    @app.get("/api/sales/recent", endpoint="sales_recent")
    @login_required
    def recent():
        page, limit = parse_page_args(
            request.args.get("page"), request.args.get("limit"), default_limit=DEFAULT_API_PAGE_LIMIT
        )
        user = current_user()
        result = service.recent(user.id, page=page, limit=limit)
        return jsonify(
            {
                "sales": [sale_row_to_json(s, user.display_name) for s in result.items],
                "totalCount": result.total_count,
            }
        )

    @app.get("/api/sales/<int:sale_id>", endpoint="sale_detail")
    @login_required
    def detail(sale_id: int):
        return jsonify(sale_detail_to_json(service.detail(sale_id, current_user())))

    @app.post("/api/sales", endpoint="record_sale")
    @login_required
    def record_sale():
        sale_request = SaleRequest.from_payload(json_body())
        recorded = service.record_sale(current_user().id, sale_request)
        return jsonify(recorded_sale_to_json(recorded)), 201
