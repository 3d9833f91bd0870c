from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest

from employee_portal.core.enums import Role
from employee_portal.core.exceptions import DuplicateError
from employee_portal.users.mysql_user_repository import MySQLUserRepository

ROW = {
    "user_id": 2,
    "username": "staff",
    "email": "staff@example.com",
    "password_hash": "hash",
    "role": "staff",
    "full_name": "Staff Demo",
    "avatar_url": None,
    "created_at": datetime(2026, 10, 1, 9, 0),
}


@pytest.mark.parametrize(
    "method, column, value",
    [("get_by_email", "email", "staff@example.com"), ("get_by_username", "username", "staff")],
)
def test_lookup_queries_one_row_by_column(fake_db, method, column, value):
    conn = fake_db(rows=[ROW])
    user = getattr(MySQLUserRepository(conn), method)(value)

    assert user.user_id == 2
    assert user.role == Role.STAFF
    assert user.display_name == "Staff Demo"
    sql, params = conn.statements[0]
    assert sql.endswith(f"FROM users WHERE {column}=%s LIMIT 1")
    assert params == (value,)
    assert conn.closed


def test_lookup_without_rows_returns_none(fake_db):
    repo = MySQLUserRepository(fake_db())
    assert repo.get_by_email("nobody@example.com") is None
    assert repo.get_by_username("nobody") is None


def test_create_stores_role_value(fake_db):
    conn = fake_db()
    user = MySQLUserRepository(conn).create(
        username="budi", email="budi@example.com", password_hash="hash", role=Role.ADMIN
    )

    assert user.user_id == 1
    sql, params = conn.statements[0]
    assert sql.startswith("INSERT INTO users")
    assert params[:4] == ("budi", "budi@example.com", "hash", "admin")
    assert conn.committed


def test_create_duplicate_maps_to_duplicate_error(fake_db):
    conn = fake_db(fail_on="INSERT INTO users", error=mysql.connector.IntegrityError(msg="dup", errno=1062))
    with pytest.raises(DuplicateError):
        MySQLUserRepository(conn).create(
            username="staff", email="staff@example.com", password_hash="hash", role=Role.STAFF
        )
    assert conn.rolled_back
