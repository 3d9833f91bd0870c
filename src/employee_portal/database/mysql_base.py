from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import mysql.connector

from ..core.exceptions import DuplicateError, ValidationError
from .connection import DatabaseConnection

# MySQL error number for a UNIQUE key violation.
ER_DUP_ENTRY = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on any error.

    Everything executed inside one `with` block is a single transaction.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def raise_if_duplicate(exc: mysql.connector.Error, message: str) -> None:
    """Translate a UNIQUE violation into DuplicateError; other errors propagate."""
    if getattr(exc, "errno", None) == ER_DUP_ENTRY:
        raise DuplicateError(message) from exc


def build_update(
    table: str,
    key_column: str,
    key_value: int,
    changes: Mapping[str, Any],
    allowed: Iterable[str],
) -> Tuple[str, tuple]:
    """Build `UPDATE table SET a=%s, b=%s WHERE key=%s` from a whitelisted change set."""

    allowed = set(allowed)
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(unknown)}")
    if not changes:
        raise ValidationError("No fields to update")

    columns = sorted(changes)
    assignments = ", ".join(f"{col}=%s" for col in columns)
    params = tuple(_to_db_value(changes[col]) for col in columns) + (int(key_value),)
    return f"UPDATE {table} SET {assignments} WHERE {key_column}=%s", params


def _to_db_value(value: Any) -> Any:
    # Enums (str subclasses) are stored by value.
    return getattr(value, "value", value)
