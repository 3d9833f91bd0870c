from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_date, format_time, isoformat, now_local, working_hours
from ..common.pagination import Page
from ..core.constants import DEFAULT_ATTENDANCE_LOCATION
from ..core.exceptions import ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayStatus:
    check_in_time: Optional[str]
    check_out_time: Optional[str]
    working_hours: Optional[str]
    status: str


def status_label(record: Optional[AttendanceRecord]) -> str:
    if record is None:
        return "Not Started"
    return "Completed" if record.check_out else "In Progress"


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, location: str = DEFAULT_ATTENDANCE_LOCATION):
        self._attendance = attendance
        self._location = location

    @property
    def location(self) -> str:
        return self._location

    def check_in(self, user_id: int, *, note: Optional[str] = None, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()

        if self._attendance.get_today_for_user(user_id, now=now):
            raise ValidationError("Already checked in today")

        record = self._attendance.create(user_id=user_id, check_in=now, location=self._location, note=note)
        logger.info("User %s checked in at %s", user_id, now.isoformat(timespec="seconds"))
        return record

    def check_out(self, user_id: int, *, note: Optional[str] = None, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()

        record = self._attendance.get_today_for_user(user_id, now=now)
        if not record:
            raise ValidationError("No check-in record found for today")
        if record.check_out is not None:
            raise ValidationError("Already checked out today")

        merged_note = record.note
        if note:
            merged_note = f"{record.note}; {note}" if record.note else note

        updated = self._attendance.update(record.attendance_id, {"check_out": now, "note": merged_note})
        logger.info("User %s checked out after %s", user_id, working_hours(updated.check_in, updated.check_out))
        return updated

    def today_status(self, user_id: int, *, now: Optional[datetime] = None) -> TodayStatus:
        record = self._attendance.get_today_for_user(user_id, now=now)
        if not record:
            return TodayStatus(check_in_time=None, check_out_time=None, working_hours=None, status=status_label(None))

        return TodayStatus(
            check_in_time=format_time(record.check_in),
            check_out_time=format_time(record.check_out),
            working_hours=working_hours(record.check_in, record.check_out),
            status=status_label(record),
        )

    def history(self, user_id: int, *, page: int = 1, limit: int = 10) -> Page[AttendanceRecord]:
        return self._attendance.list_for_user(user_id, page, limit)


def history_row_to_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.attendance_id,
        "date": format_date(record.check_in),
        "checkIn": isoformat(record.check_in),
        "checkOut": isoformat(record.check_out),
        "workingHours": working_hours(record.check_in, record.check_out),
        "status": status_label(record),
    }
