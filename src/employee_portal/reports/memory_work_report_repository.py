from __future__ import annotations

import itertools
import threading
from collections import Counter
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.pagination import Page, paginate
from ..core.enums import WorkReportStatus
from ..core.exceptions import NotFoundError
from .model import WorkReport, merge_changes
from .repository import WorkReportRepository


def _newest_first(reports):
    return sorted(reports, key=lambda r: (r.created_at, r.report_id), reverse=True)


class MemoryWorkReportRepository(WorkReportRepository):
    def __init__(self):
        self._reports: dict[int, WorkReport] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _snapshot(self) -> list[WorkReport]:
        with self._lock:
            return list(self._reports.values())

    def get_by_id(self, report_id: int) -> Optional[WorkReport]:
        return self._reports.get(int(report_id))

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[WorkReport]:
        reports = _newest_first(r for r in self._snapshot() if r.user_id == int(user_id))
        return paginate(reports, page, limit)

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
        with self._lock:
            report = WorkReport(
                report_id=next(self._ids),
                user_id=int(user_id),
                title=title,
                report_type=report_type,
                department=department,
                tasks=tasks,
                outcomes=outcomes,
                status=status,
                created_at=now_local(),
                challenges=challenges,
                next_steps=next_steps,
            )
            self._reports[report.report_id] = report
            return report

    def update(self, report_id: int, changes: Mapping[str, Any]) -> WorkReport:
        with self._lock:
            report = self._reports.get(int(report_id))
            if report is None:
                raise NotFoundError(f"Work report with id {report_id} not found")
            merged = merge_changes(report, changes)
            self._reports[report.report_id] = merged
            return merged

    def count_by_status(self, start: datetime, end: datetime) -> dict[WorkReportStatus, int]:
        return dict(Counter(r.status for r in self._snapshot() if start <= r.created_at < end))

    def list_recent(self, limit: int) -> Sequence[WorkReport]:
        return _newest_first(self._snapshot())[: int(limit)]

    def count(self) -> int:
        return len(self._reports)
