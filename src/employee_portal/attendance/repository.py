from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[AttendanceRecord]:
        """Newest check-in first."""

        raise NotImplementedError

    def get_today_for_user(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        """Record whose check-in falls in [start of today, start of tomorrow), local time."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        check_in: datetime,
        location: str,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, attendance_id: int, changes: Mapping[str, Any]) -> AttendanceRecord:
        """Merge `changes` into the record; NotFoundError when the id is unknown."""

        raise NotImplementedError

    def count_users_checked_in(self, start: datetime, end: datetime) -> int:
        """Distinct users with a check-in in [start, end)."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        """Newest check-ins across all users (activity feed)."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
