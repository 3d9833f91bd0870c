from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from employee_portal.core.enums import Role, WorkReportStatus
from employee_portal.dashboard.service import DashboardService
from employee_portal.sales.model import NewSale, NewSaleItem


def _sale(user_id, invoice, amount, sale_date):
    return NewSale(
        invoice_number=invoice,
        user_id=user_id,
        customer_name="PT Maju",
        sale_date=sale_date,
        total_amount=Decimal(amount),
        tax_amount=Decimal("0"),
        discount_amount=Decimal("0"),
        payment_method="cash",
    )


def _report(storage, user_id, status):
    return storage.reports.create(
        user_id=user_id, title="Daily", report_type="daily", department="Sales", tasks="x", outcomes="y", status=status
    )


@pytest.fixture
def service(storage):
    return DashboardService(
        storage.users, storage.attendance, storage.sales, storage.reports, daily_target=Decimal("20000000")
    )


def test_stats_on_an_empty_day(service):
    assert service.stats().to_json() == {
        "totalSales": "Rp 0",
        "attendance": "0.0%",
        "target": "0.0%",
        "workCompleted": "0/0",
    }


def test_stats_are_computed_from_data(service, storage, admin, staff):
    now = datetime.now()
    item = [NewSaleItem(product_id=1, quantity=1, unit_price=Decimal("1"))]
    storage.sales.create_with_items(_sale(staff.user_id, "INV-20261018-AAAAAA", "17040000", now), item)
    storage.sales.create_with_items(_sale(staff.user_id, "INV-20261017-BBBBBB", "999", now - timedelta(days=1)), item)

    storage.attendance.create(user_id=staff.user_id, check_in=now, location="HQ")
    storage.users.create(username="third", email="third@example.com", password_hash=generate_password_hash("x"), role=Role.STAFF)

    _report(storage, staff.user_id, WorkReportStatus.COMPLETED)
    _report(storage, admin.user_id, WorkReportStatus.SUBMITTED)

    stats = service.stats(now=now).to_json()
    assert stats["totalSales"] == "Rp 17.040.000"
    assert stats["target"] == "85.2%"
    assert stats["attendance"] == "33.3%"
    assert stats["workCompleted"] == "1/2"


def test_activities_merge_sources_newest_first(service, storage, admin, staff):
    now = datetime.now()
    storage.attendance.create(user_id=staff.user_id, check_in=now - timedelta(hours=3), location="HQ")
    item = [NewSaleItem(product_id=1, quantity=1, unit_price=Decimal("1"))]
    storage.sales.create_with_items(_sale(staff.user_id, "INV-20261018-CCCCCC", "45750000", now), item)
    _report(storage, admin.user_id, WorkReportStatus.REVIEW_NEEDED)

    first = service.activities(page=1, limit=2)
    assert first.total_count == 3
    assert {a.id.split("-")[0] for a in first.items} == {"report", "sale"}

    second = service.activities(page=2, limit=2)
    assert [a.id for a in second.items] == ["attendance-1"]

    body = service.activities_to_json(first, now=now)
    assert body["totalCount"] == 3
    rows = {row["id"].split("-")[0]: row for row in body["activities"]}
    report_row, sale_row = rows["report"], rows["sale"]
    assert report_row["employeeName"] == "Admin Demo"
    assert report_row["employeeRole"] == "Admin"
    assert report_row["status"] == "Review Needed"
    assert report_row["date"].startswith("Today, ")
    assert sale_row["activity"] == "Recorded sale INV-20261018-CCCCCC (Rp 45.750.000)"
    assert sale_row["status"] == "Completed"


def test_dashboard_endpoints(client, staff_headers):
    client.post("/api/attendance", json={"attendanceType": "checkin"}, headers=staff_headers)

    stats = client.get("/api/dashboard/stats", headers=staff_headers).get_json()
    assert stats["attendance"] == "50.0%"

    body = client.get("/api/dashboard/activities", headers=staff_headers).get_json()
    assert body["totalCount"] == 1
    assert body["activities"][0]["employeeName"] == "Staff Demo"
    assert body["activities"][0]["status"] == "In Progress"
