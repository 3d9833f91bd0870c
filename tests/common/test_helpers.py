from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from employee_portal.common.datetime_utils import format_date, format_time, relative_day_label, working_hours
from employee_portal.common.formatting import format_currency_idr, format_percent, money_to_json
from employee_portal.common.pagination import paginate, parse_page_args
from employee_portal.common.validators import require_amount, require_datetime, require_int
from employee_portal.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "page, limit, expected",
    [(1, 4, [0, 1, 2, 3]), (2, 4, [4, 5, 6, 7]), (3, 4, [8, 9]), (4, 4, [])],
)
def test_paginate(page, limit, expected):
    result = paginate(list(range(10)), page, limit)
    assert result.items == expected
    assert result.total_count == 10


def test_parse_page_args():
    assert parse_page_args(None, None, default_limit=4) == (1, 4)
    assert parse_page_args("2", "500") == (2, 100)
    with pytest.raises(ValidationError):
        parse_page_args("-1", None)
    with pytest.raises(ValidationError):
        paginate([], 0, 4)


def test_working_hours_floors_minutes():
    start = datetime(2026, 10, 18, 9, 0)
    assert working_hours(start, datetime(2026, 10, 18, 17, 30)) == "8 hrs 30 mins"
    assert working_hours(start, datetime(2026, 10, 18, 9, 0, 59)) == "0 hrs 0 mins"
    assert working_hours(start, None) is None


def test_time_and_date_formatting():
    value = datetime(2026, 10, 18, 16, 15)
    assert format_time(value) == "04:15 PM"
    assert format_date(value) == "Oct 18, 2026"


def test_relative_day_label():
    now = datetime(2026, 10, 18, 12, 0)
    assert relative_day_label(datetime(2026, 10, 18, 9, 41), now=now) == "Today, 9:41 AM"
    assert relative_day_label(datetime(2026, 10, 17, 16, 15), now=now) == "Yesterday, 4:15 PM"
    assert relative_day_label(datetime(2026, 10, 14, 16, 15), now=now) == "Oct 14, 2026, 4:15 PM"


def test_money_formatting():
    assert format_currency_idr(Decimal("45750000")) == "Rp 45.750.000"
    assert format_percent(Decimal("97.777")) == "97.8%"
    assert money_to_json(Decimal("250.00")) == 250
    assert money_to_json(Decimal("27.5")) == 27.5


def test_require_int():
    assert require_int("7", "n") == 7
    assert require_int(3.0, "n") == 3
    for bad in (True, "x", 1.5, None):
        with pytest.raises(ValidationError):
            require_int(bad, "n")
    with pytest.raises(ValidationError):
        require_int(0, "n", minimum=1)
    assert require_int(2147483647, "n", maximum=2147483647) == 2147483647
    with pytest.raises(ValidationError, match="at most"):
        require_int(2147483648, "n", maximum=2147483647)


def test_require_amount_bounds():
    assert require_amount("9999999999999.99", "price") == Decimal("9999999999999.99")
    for bad in ("10000000000000", "1e30", 1e300, "Infinity", "-1"):
        with pytest.raises(ValidationError):
            require_amount(bad, "price")


def test_require_datetime():
    assert require_datetime("2026-10-18", "d") == datetime(2026, 10, 18)
    assert require_datetime("2026-10-18T10:30:00", "d") == datetime(2026, 10, 18, 10, 30)
    assert require_datetime("2026-10-18T10:30:00Z", "d").tzinfo is None
    with pytest.raises(ValidationError):
        require_datetime("tomorrow", "d")
