from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import status_label
from ..common.datetime_utils import day_range, now_local, relative_day_label, working_hours
from ..common.formatting import format_currency_idr, format_percent
from ..common.pagination import Page, offset_for
from ..core.constants import DEFAULT_DAILY_SALES_TARGET
from ..core.enums import WorkReportStatus
from ..reports.repository import WorkReportRepository
from ..sales.repository import SaleRepository
from ..sales.totals import summarize_daily
from ..users.model import User
from ..users.repository import UserRepository


@dataclass(frozen=True)
class DashboardStats:
    total_sales: str
    attendance: str
    target: str
    work_completed: str

    def to_json(self) -> dict:
        return {
            "totalSales": self.total_sales,
            "attendance": self.attendance,
            "target": self.target,
            "workCompleted": self.work_completed,
        }


@dataclass(frozen=True)
class Activity:
    id: str
    user_id: int
    activity: str
    status: str
    occurred_at: datetime


class DashboardService:
    """Figures for the landing page, computed from stored data."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        sales: SaleRepository,
        reports: WorkReportRepository,
        *,
        daily_target: Decimal = DEFAULT_DAILY_SALES_TARGET,
    ):
        self._users = users
        self._attendance = attendance
        self._sales = sales
        self._reports = reports
        self._daily_target = daily_target

    def stats(self, *, now: Optional[datetime] = None) -> DashboardStats:
        now = now or now_local()
        start, end = day_range(now.date())

        summary = summarize_daily(self._sales.get_daily_totals(now.date()), target=self._daily_target)

        registered = self._users.count()
        present = self._attendance.count_users_checked_in(start, end)
        attendance_pct = Decimal(present) * 100 / registered if registered else Decimal("0")

        by_status = self._reports.count_by_status(start, end)
        completed = by_status.get(WorkReportStatus.COMPLETED, 0)

        return DashboardStats(
            total_sales=format_currency_idr(summary.total_sales),
            attendance=format_percent(attendance_pct),
            target=format_percent(summary.progress),
            work_completed=f"{completed}/{sum(by_status.values())}",
        )

    def activities(self, *, page: int = 1, limit: int = 4) -> Page[Activity]:
        start = offset_for(page, limit)
        # The newest page*limit rows of each source contain the newest page*limit overall.
        window = page * limit

        events: list[Activity] = []
        for record in self._attendance.list_recent(window):
            if record.check_out:
                text = f"Checked out after {working_hours(record.check_in, record.check_out)}"
            else:
                text = f"Checked in at {record.location}"
            events.append(
                Activity(
                    id=f"attendance-{record.attendance_id}",
                    user_id=record.user_id,
                    activity=text,
                    status=status_label(record),
                    occurred_at=record.check_in,
                )
            )
        for sale in self._sales.list_recent(window):
            events.append(
                Activity(
                    id=f"sale-{sale.sale_id}",
                    user_id=sale.user_id,
                    activity=f"Recorded sale {sale.invoice_number} ({format_currency_idr(sale.total_amount)})",
                    status=sale.status.value.title(),
                    occurred_at=sale.created_at,
                )
            )
        for report in self._reports.list_recent(window):
            events.append(
                Activity(
                    id=f"report-{report.report_id}",
                    user_id=report.user_id,
                    activity=f"Submitted work report: {report.title}",
                    status=report.status.label,
                    occurred_at=report.created_at,
                )
            )

        events.sort(key=lambda a: a.occurred_at, reverse=True)
        total = self._attendance.count() + self._sales.count() + self._reports.count()
        return Page(items=events[start : start + limit], total_count=total)

    def activities_to_json(self, page: Page[Activity], *, now: Optional[datetime] = None) -> dict:
        authors: dict[int, Optional[User]] = {}
        rows = []
        for activity in page.items:
            if activity.user_id not in authors:
                authors[activity.user_id] = self._users.get_by_id(activity.user_id)
            user = authors[activity.user_id]
            rows.append(
                {
                    "id": activity.id,
                    "employeeName": user.display_name if user else "Unknown",
                    "employeeRole": user.role.value.title() if user else "",
                    "activity": activity.activity,
                    "status": activity.status,
                    "date": relative_day_label(activity.occurred_at, now=now),
                }
            )
        return {"activities": rows, "totalCount": page.total_count}
