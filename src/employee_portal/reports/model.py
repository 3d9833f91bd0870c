from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import WorkReportStatus
from ..core.exceptions import ValidationError

UPDATABLE_FIELDS = frozenset(
    {"title", "report_type", "department", "tasks", "outcomes", "challenges", "next_steps", "status"}
)
REQUIRED_FIELDS = ("title", "report_type", "department", "tasks", "outcomes")


@dataclass(frozen=True)
class WorkReport:
    """Domain entity: a staff member's report on work done."""

    report_id: int
    user_id: int
    title: str
    report_type: str
    department: str
    tasks: str
    outcomes: str
    status: WorkReportStatus
    created_at: datetime
    challenges: Optional[str] = None
    next_steps: Optional[str] = None


def merge_changes(report: WorkReport, changes: Mapping[str, Any]) -> WorkReport:
    if not changes:
        raise ValidationError("No fields to update")
    unknown = sorted(set(changes) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(unknown)}")

    merged = replace(report, **dict(changes))
    for name in REQUIRED_FIELDS:
        if not getattr(merged, name):
            raise ValidationError(f"{name} cannot be empty")
    if not isinstance(merged.status, WorkReportStatus):
        raise ValidationError("status is not a valid work report status")
    return merged
