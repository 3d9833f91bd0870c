from __future__ import annotations

import importlib
from datetime import datetime

import pytest

from employee_portal.auth.identity import StaticIdentityProvider
from employee_portal.container import build_container
from employee_portal.main import create_app
from employee_portal.storage import memory_storage, seed_demo_users

TESTING_SETTINGS = "employee_portal.config.testing"

TOKENS = {
    "admin-token": "admin@example.com",
    "staff-token": "staff@example.com",
}


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 18, 9, 0, 0)


@pytest.fixture
def storage():
    storage = memory_storage()
    seed_demo_users(storage.users)
    return storage


@pytest.fixture
def admin(storage):
    return storage.users.get_by_email("admin@example.com")


@pytest.fixture
def staff(storage):
    return storage.users.get_by_email("staff@example.com")


@pytest.fixture
def container(storage):
    settings = importlib.import_module(TESTING_SETTINGS)
    return build_container(settings, storage=storage, identity=StaticIdentityProvider(TOKENS))


@pytest.fixture
def app(container):
    return create_app(TESTING_SETTINGS, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def staff_headers():
    return {"Authorization": "Bearer staff-token"}


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer admin-token"}


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None
        self._rows = []

    def execute(self, sql, params=()):
        self._conn.statements.append((" ".join(sql.split()), params))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise self._conn.error
        self.lastrowid = len(self._conn.statements)
        if self._conn.results:
            self._rows = list(self._conn.results.pop(0))
        else:
            self._rows = list(self._conn.rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class FakeConnection:
    """Records every statement; `results` feeds one row list per execute, `rows` is the fallback."""

    def __init__(self, *, fail_on=None, error=None, rows=(), results=None):
        self.fail_on = fail_on
        self.error = error
        self.rows = rows
        self.results = list(results or [])
        self.statements = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def connect(self):
        return self

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


@pytest.fixture
def fake_db():
    """Build a FakeConnection; it is its own connection factory."""
    return FakeConnection
