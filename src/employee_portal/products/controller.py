from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import auth_required
from ..common.validators import require_int
from ..container import Container
from .service import category_to_json, product_to_json


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.session_validator)
    service = container.product_service

    @app.get("/api/products/categories", endpoint="product_categories")
    @login_required
    def categories():
        return jsonify({"categories": [category_to_json(c) for c in service.categories()]})

    @app.get("/api/products", endpoint="products")
    @login_required
    def products():
        raw = request.args.get("categoryId")
        category_id = require_int(raw, "categoryId", minimum=1) if raw else None
        return jsonify({"products": [product_to_json(p) for p in service.products(category_id)]})
