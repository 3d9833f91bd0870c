from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from employee_portal.attendance.memory_attendance_repository import MemoryAttendanceRepository
from employee_portal.attendance.service import AttendanceService, history_row_to_json, status_label
from employee_portal.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def service():
    return AttendanceService(MemoryAttendanceRepository(), location="HQ")


def test_check_in_then_out_computes_working_hours(service, fixed_now):
    record = service.check_in(1, now=fixed_now)
    assert record.location == "HQ"
    assert record.is_open

    out = service.check_out(1, now=fixed_now.replace(hour=17, minute=30))
    assert out.attendance_id == record.attendance_id
    assert history_row_to_json(out)["workingHours"] == "8 hrs 30 mins"
    assert status_label(out) == "Completed"


def test_second_check_in_same_day_is_rejected(service, fixed_now):
    service.check_in(1, now=fixed_now)
    with pytest.raises(ValidationError, match="Already checked in today"):
        service.check_in(1, now=fixed_now + timedelta(hours=1))


def test_check_in_next_day_is_allowed(service, fixed_now):
    service.check_in(1, now=fixed_now)
    service.check_in(1, now=fixed_now + timedelta(days=1))
    assert service.history(1).total_count == 2


def test_check_out_without_check_in(service, fixed_now):
    with pytest.raises(ValidationError, match="No check-in record found for today"):
        service.check_out(1, now=fixed_now)


def test_check_out_twice(service, fixed_now):
    service.check_in(1, now=fixed_now)
    service.check_out(1, now=fixed_now + timedelta(hours=8))
    with pytest.raises(ValidationError, match="Already checked out today"):
        service.check_out(1, now=fixed_now + timedelta(hours=9))


def test_check_out_appends_note(service, fixed_now):
    service.check_in(1, note="on site", now=fixed_now)
    out = service.check_out(1, note="left early", now=fixed_now + timedelta(hours=4))
    assert out.note == "on site; left early"


def test_today_status(service, fixed_now):
    assert service.today_status(1, now=fixed_now).status == "Not Started"

    service.check_in(1, now=fixed_now)
    status = service.today_status(1, now=fixed_now)
    assert status.status == "In Progress"
    assert status.check_in_time == "09:00 AM"
    assert status.check_out_time is None
    assert status.working_hours is None


def test_history_is_newest_first_and_paginated(service, fixed_now):
    for day in range(5):
        service.check_in(1, now=fixed_now + timedelta(days=day))
    service.check_in(2, now=fixed_now)

    page = service.history(1, page=2, limit=2)
    assert page.total_count == 5
    assert [r.check_in.day for r in page.items] == [20, 19]

    last = service.history(1, page=3, limit=2)
    assert [r.check_in.day for r in last.items] == [18]


def test_update_rejects_unknown_fields_and_ids(fixed_now):
    repo = MemoryAttendanceRepository()
    record = repo.create(user_id=1, check_in=fixed_now, location="HQ")

    with pytest.raises(ValidationError):
        repo.update(record.attendance_id, {"user_id": 2})
    with pytest.raises(ValidationError):
        repo.update(record.attendance_id, {"check_out": fixed_now - timedelta(minutes=1)})
    with pytest.raises(NotFoundError):
        repo.update(999, {"note": "x"})


def test_count_users_checked_in(fixed_now):
    repo = MemoryAttendanceRepository()
    repo.create(user_id=1, check_in=fixed_now, location="HQ")
    repo.create(user_id=1, check_in=fixed_now + timedelta(hours=1), location="HQ")
    repo.create(user_id=2, check_in=fixed_now, location="HQ")
    repo.create(user_id=3, check_in=fixed_now - timedelta(days=1), location="HQ")

    start = datetime(2026, 10, 18)
    assert repo.count_users_checked_in(start, start + timedelta(days=1)) == 2
