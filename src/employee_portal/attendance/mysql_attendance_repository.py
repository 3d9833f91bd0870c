from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import day_range, now_local
from ..common.pagination import Page, offset_for
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone
from .model import UPDATABLE_FIELDS, AttendanceRecord, merge_changes
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, check_in, check_out, location, note, created_at"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        location=r["location"],
        created_at=r["created_at"],
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[AttendanceRecord]:
        offset = offset_for(page, limit)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY check_in DESC, attendance_id DESC
                LIMIT %s OFFSET %s
                """,
                (int(user_id), int(limit), offset),
            )
            rows = fetchall(cur)
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records WHERE user_id=%s", (int(user_id),))
            total = fetchone(cur)
        return Page(items=[_to_record(r) for r in rows], total_count=int(total["n"]) if total else 0)

    def get_today_for_user(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        start, end = day_range((now or now_local()).date())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND check_in >= %s AND check_in < %s
                ORDER BY check_in DESC, attendance_id DESC
                LIMIT 1
                """,
                (int(user_id), start, end),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        user_id: int,
        check_in: datetime,
        location: str,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        created_at = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, check_in, check_out, location, note, created_at)
                VALUES(%s,%s,NULL,%s,%s,%s)
                """,
                (int(user_id), check_in, location, note, created_at),
            )
            attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=int(user_id),
            check_in=check_in,
            check_out=None,
            location=location,
            created_at=created_at,
            note=note,
        )

    def update(self, attendance_id: int, changes: Mapping[str, Any]) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s FOR UPDATE",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Attendance record with id {attendance_id} not found")

            merged = merge_changes(_to_record(r), changes)
            sql, params = build_update("attendance_records", "attendance_id", attendance_id, changes, UPDATABLE_FIELDS)
            cur.execute(sql, params)
            return merged

    def count_users_checked_in(self, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT user_id) AS n
                FROM attendance_records
                WHERE check_in >= %s AND check_in < %s
                """,
                (start, end),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                ORDER BY check_in DESC, attendance_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
