from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError

UPDATABLE_FIELDS = frozenset({"check_in", "check_out", "location", "note"})


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in (and optional check-out) of a user."""

    attendance_id: int
    user_id: int
    check_in: datetime
    check_out: Optional[datetime]
    location: str
    created_at: datetime
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None


def merge_changes(record: AttendanceRecord, changes: Mapping[str, Any]) -> AttendanceRecord:
    """Apply a partial update; both storage backends go through this check."""

    if not changes:
        raise ValidationError("No fields to update")
    unknown = sorted(set(changes) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(unknown)}")

    merged = replace(record, **dict(changes))
    if merged.check_in is None:
        raise ValidationError("check_in is required")
    if merged.check_out is not None and merged.check_out < merged.check_in:
        raise ValidationError("Check-out time cannot be earlier than check-in time")
    return merged
