from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.pagination import Page, offset_for
from ..core.enums import WorkReportStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone
from .model import UPDATABLE_FIELDS, WorkReport, merge_changes
from .repository import WorkReportRepository

_COLUMNS = (
    "report_id, user_id, title, report_type, department, tasks, outcomes, challenges, next_steps, status, created_at"
)


def _to_report(r: Dict[str, Any]) -> WorkReport:
    return WorkReport(
        report_id=int(r["report_id"]),
        user_id=int(r["user_id"]),
        title=r["title"],
        report_type=r["report_type"],
        department=r["department"],
        tasks=r["tasks"],
        outcomes=r["outcomes"],
        status=WorkReportStatus(r["status"]),
        created_at=r["created_at"],
        challenges=r.get("challenges"),
        next_steps=r.get("next_steps"),
    )


class MySQLWorkReportRepository(WorkReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, report_id: int) -> Optional[WorkReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_reports WHERE report_id=%s", (int(report_id),))
            r = fetchone(cur)
            return _to_report(r) if r else None

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[WorkReport]:
        offset = offset_for(page, limit)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_reports
                WHERE user_id=%s
                ORDER BY created_at DESC, report_id DESC
                LIMIT %s OFFSET %s
                """,
                (int(user_id), int(limit), offset),
            )
            rows = fetchall(cur)
            cur.execute("SELECT COUNT(*) AS n FROM work_reports WHERE user_id=%s", (int(user_id),))
            total = fetchone(cur)
        return Page(items=[_to_report(r) for r in rows], total_count=int(total["n"]) if total else 0)

    def create(
        self,
        *,
        user_id: int,
        title: str,
        report_type: str,
        department: str,
        tasks: str,
        outcomes: str,
        status: WorkReportStatus,
        challenges: Optional[str] = None,
        next_steps: Optional[str] = None,
    ) -> WorkReport:
        created_at = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_reports(
                    user_id, title, report_type, department, tasks, outcomes, challenges, next_steps, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    title,
                    report_type,
                    department,
                    tasks,
                    outcomes,
                    challenges,
                    next_steps,
                    status.value,
                    created_at,
                ),
            )
            report_id = int(cur.lastrowid)

        return WorkReport(
            report_id=report_id,
            user_id=int(user_id),
            title=title,
            report_type=report_type,
            department=department,
            tasks=tasks,
            outcomes=outcomes,
            status=status,
            created_at=created_at,
            challenges=challenges,
            next_steps=next_steps,
        )

    def update(self, report_id: int, changes: Mapping[str, Any]) -> WorkReport:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_reports WHERE report_id=%s FOR UPDATE", (int(report_id),))
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Work report with id {report_id} not found")

            merged = merge_changes(_to_report(r), changes)
            sql, params = build_update("work_reports", "report_id", report_id, changes, UPDATABLE_FIELDS)
            cur.execute(sql, params)
            return merged

    def count_by_status(self, start: datetime, end: datetime) -> dict[WorkReportStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS n
                FROM work_reports
                WHERE created_at >= %s AND created_at < %s
                GROUP BY status
                """,
                (start, end),
            )
            return {WorkReportStatus(r["status"]): int(r["n"]) for r in fetchall(cur)}

    def list_recent(self, limit: int) -> Sequence[WorkReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_reports ORDER BY created_at DESC, report_id DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM work_reports")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
