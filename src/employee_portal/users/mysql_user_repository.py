from __future__ import annotations

from typing import Any, Dict, Optional

import mysql.connector

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, raise_if_duplicate
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, username, email, password_hash, role, full_name, avatar_url, created_at"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        created_at=row["created_at"],
        full_name=row.get("full_name"),
        avatar_url=row.get("avatar_url"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: Any) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s LIMIT 1", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: Role,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        created_at = now_local()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, email, password_hash, role, full_name, avatar_url, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (username, email, password_hash, role.value, full_name, avatar_url, created_at),
                )
                user_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            raise_if_duplicate(e, "Username or email already registered")
            raise

        return User(
            user_id=user_id,
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
            full_name=full_name,
            avatar_url=avatar_url,
        )

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
