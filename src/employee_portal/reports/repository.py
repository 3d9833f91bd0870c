from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page
from ..core.enums import WorkReportStatus
from .model import WorkReport


class WorkReportRepository(Protocol):
    def get_by_id(self, report_id: int) -> Optional[WorkReport]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[WorkReport]:
        """Newest first by created_at."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, report_id: int, changes: Mapping[str, Any]) -> WorkReport:
        raise NotImplementedError

    def count_by_status(self, start: datetime, end: datetime) -> dict[WorkReportStatus, int]:
        """Reports created in [start, end), grouped by status."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[WorkReport]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
