from __future__ import annotations

from types import SimpleNamespace

import pytest

from employee_portal.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from employee_portal.storage import build_storage


def test_memory_backend_seeds_demo_users():
    storage = build_storage(SimpleNamespace(STORAGE_BACKEND="memory", AUTO_SEED_DB=True))
    assert storage.backend == "memory"
    assert storage.users.count() == 2
    assert len(storage.products.list_all()) == 9
    storage.close()


def test_mysql_backend_builds_without_connecting():
    settings = SimpleNamespace(STORAGE_BACKEND="mysql", DB_CONFIG={"host": "db", "database": "portal"})
    storage = build_storage(settings)
    assert isinstance(storage.attendance, MySQLAttendanceRepository)
    assert storage.conn.config.database == "portal"

    storage.close()
    with pytest.raises(RuntimeError):
        storage.conn.connect()


def test_unknown_backend():
    with pytest.raises(ValueError):
        build_storage(SimpleNamespace(STORAGE_BACKEND="sqlite"))


def test_cors_headers_for_allowed_origin(client):
    resp = client.get("/api/auth/config", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"

    resp = client.get("/api/auth/config", headers={"Origin": "http://evil.example"})
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "message" in resp.get_json()
