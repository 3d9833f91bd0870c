from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_range(day: date) -> tuple[datetime, datetime]:
    """Half-open [start of day, start of next day) window."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Closed [00:00:00, 23:59:59.999999] window used by sale aggregation."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def format_time(value: Optional[datetime]) -> Optional[str]:
    """09:05 -> '09:05 AM'."""
    if value is None:
        return None
    return value.strftime("%I:%M %p")


def format_date(value: Optional[datetime]) -> Optional[str]:
    """2026-10-18 -> 'Oct 18, 2026'."""
    if value is None:
        return None
    return value.strftime("%b %d, %Y")


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def working_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> Optional[str]:
    """Elapsed time as 'H hrs M mins', floored to whole minutes."""
    if check_in is None or check_out is None:
        return None

    elapsed_ms = int((check_out - check_in) / timedelta(milliseconds=1))
    hours = elapsed_ms // (1000 * 60 * 60)
    minutes = (elapsed_ms % (1000 * 60 * 60)) // (1000 * 60)
    return f"{hours} hrs {minutes} mins"


def relative_day_label(value: datetime, *, now: Optional[datetime] = None) -> str:
    """'Today, 9:41 AM' / 'Yesterday, 4:15 PM' / 'Oct 14, 2026, 4:15 PM'."""
    now = now or now_local()
    clock = value.strftime("%I:%M %p").lstrip("0")

    delta_days = (now.date() - value.date()).days
    if delta_days == 0:
        return f"Today, {clock}"
    if delta_days == 1:
        return f"Yesterday, {clock}"
    return f"{format_date(value)}, {clock}"
