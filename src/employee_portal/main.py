from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .common.http import register_error_handlers

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .dashboard.controller import register as register_dashboard
from .products.controller import register as register_products
from .reports.controller import register as register_reports
from .sales.controller import register as register_sales
from .users.controller import register as register_users

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _parse_origins(value) -> set[str]:
    if isinstance(value, str):
        value = value.split(",")
    return {origin.strip() for origin in value or () if origin.strip()}


def _configure_logging(app: Flask, level_name: str) -> None:
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)
    logging.getLogger("employee_portal").setLevel(level)


def _bootstrap_database(app: Flask, settings) -> None:
    db_config = getattr(settings, "DB_CONFIG")
    app.logger.debug(
        "Database %s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        app.logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        app.logger.info("Demo seed ready")


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))
    app.logger.info("Starting with settings=%s", settings_module)

    if container is None:
        if str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower() == "mysql":
            _bootstrap_database(app, settings)
        container = build_container(settings)
        atexit.register(container.close)
    app.extensions["employee_portal"] = container

    register_auth(app, container)
    register_users(app, container)
    register_dashboard(app, container)
    register_attendance(app, container)
    register_sales(app, container)
    register_products(app, container)
    register_reports(app, container)
    register_error_handlers(app)

    allowed_origins = _parse_origins(getattr(settings, "CORS_ORIGINS", ""))

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PATCH,OPTIONS"
        return response

    return app
