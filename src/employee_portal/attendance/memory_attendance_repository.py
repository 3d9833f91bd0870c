from __future__ import annotations

import itertools
import threading
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import day_range, now_local
from ..common.pagination import Page, paginate
from ..core.exceptions import NotFoundError
from .model import AttendanceRecord, merge_changes
from .repository import AttendanceRepository


def _newest_first(records):
    return sorted(records, key=lambda r: (r.check_in, r.attendance_id), reverse=True)


class MemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._records: dict[int, AttendanceRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _snapshot(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._records.values())

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._records.get(int(attendance_id))

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[AttendanceRecord]:
        records = _newest_first(r for r in self._snapshot() if r.user_id == int(user_id))
        return paginate(records, page, limit)

    def get_today_for_user(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        start, end = day_range((now or now_local()).date())
        today = [r for r in self._snapshot() if r.user_id == int(user_id) and start <= r.check_in < end]
        return _newest_first(today)[0] if today else None

    def create(
        self,
        *,
        user_id: int,
        check_in: datetime,
        location: str,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        with self._lock:
            record = AttendanceRecord(
                attendance_id=next(self._ids),
                user_id=int(user_id),
                check_in=check_in,
                check_out=None,
                location=location,
                created_at=now_local(),
                note=note,
            )
            self._records[record.attendance_id] = record
            return record

    def update(self, attendance_id: int, changes: Mapping[str, Any]) -> AttendanceRecord:
        with self._lock:
            record = self._records.get(int(attendance_id))
            if record is None:
                raise NotFoundError(f"Attendance record with id {attendance_id} not found")
            merged = merge_changes(record, changes)
            self._records[record.attendance_id] = merged
            return merged

    def count_users_checked_in(self, start: datetime, end: datetime) -> int:
        return len({r.user_id for r in self._snapshot() if start <= r.check_in < end})

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        return _newest_first(self._snapshot())[: int(limit)]

    def count(self) -> int:
        return len(self._records)
