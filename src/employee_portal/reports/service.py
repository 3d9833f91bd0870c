from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..auth.session import UserProfile
from ..common.datetime_utils import isoformat
from ..common.pagination import Page
from ..common.validators import optional_text, require_non_empty
from ..core.enums import WorkReportStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import WorkReport
from .repository import WorkReportRepository

logger = logging.getLogger(__name__)

# JSON field -> (entity field, required)
PAYLOAD_FIELDS = {
    "title": ("title", True),
    "reportType": ("report_type", True),
    "department": ("department", True),
    "tasks": ("tasks", True),
    "outcomes": ("outcomes", True),
    "challenges": ("challenges", False),
    "nextSteps": ("next_steps", False),
}


def parse_status(value: Any) -> WorkReportStatus:
    """Accept stored values ("review_needed") and labels ("Review Needed")."""
    text = require_non_empty(value, "status").lower().replace(" ", "_")
    try:
        return WorkReportStatus(text)
    except ValueError:
        allowed = ", ".join(s.value for s in WorkReportStatus)
        raise ValidationError(f"status must be one of: {allowed}")


@dataclass(frozen=True)
class NewWorkReport:
    title: str
    report_type: str
    department: str
    tasks: str
    outcomes: str
    challenges: Optional[str] = None
    next_steps: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "NewWorkReport":
        values = {}
        for key, (field_name, required) in PAYLOAD_FIELDS.items():
            values[field_name] = require_non_empty(data.get(key), key) if required else optional_text(data.get(key), key)
        return cls(**values)


def changes_from_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    """Translate a PATCH body into entity field changes; unknown keys are rejected."""
    unknown = sorted(set(data) - set(PAYLOAD_FIELDS) - {"status"})
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    for key, (field_name, required) in PAYLOAD_FIELDS.items():
        if key in data:
            changes[field_name] = (
                require_non_empty(data[key], key) if required else optional_text(data[key], key)
            )
    if "status" in data:
        changes["status"] = parse_status(data["status"])
    if not changes:
        raise ValidationError("No fields to update")
    return changes


class WorkReportService:
    """Use cases: submit, list, view and amend work reports."""

    def __init__(self, reports: WorkReportRepository, users: UserRepository):
        self._reports = reports
        self._users = users

    def submit(self, user_id: int, new_report: NewWorkReport) -> WorkReport:
        report = self._reports.create(
            user_id=user_id,
            title=new_report.title,
            report_type=new_report.report_type,
            department=new_report.department,
            tasks=new_report.tasks,
            outcomes=new_report.outcomes,
            status=WorkReportStatus.SUBMITTED,
            challenges=new_report.challenges,
            next_steps=new_report.next_steps,
        )
        logger.info("User %s submitted work report %s", user_id, report.report_id)
        return report

    def list_for_user(self, user_id: int, *, page: int = 1, limit: int = 10) -> Page[WorkReport]:
        return self._reports.list_for_user(user_id, page, limit)

    def get(self, report_id: int, viewer: UserProfile) -> WorkReport:
        report = self._reports.get_by_id(report_id)
        if report is None:
            raise NotFoundError("Work report not found")
        if report.user_id != viewer.id and not viewer.is_admin:
            raise AuthorizationError("You can only access your own work reports")
        return report

    def update(self, report_id: int, changes: Mapping[str, Any], editor: UserProfile) -> WorkReport:
        self.get(report_id, editor)
        updated = self._reports.update(report_id, changes)
        logger.info("User %s updated work report %s (%s)", editor.id, report_id, ", ".join(sorted(changes)))
        return updated

    def author_name(self, report: WorkReport) -> str:
        author = self._users.get_by_id(report.user_id)
        return author.display_name if author else "Unknown"


def report_row_to_json(report: WorkReport, created_by: str) -> dict:
    return {
        "id": report.report_id,
        "title": report.title,
        "reportType": report.report_type,
        "department": report.department,
        "createdBy": created_by,
        "createdAt": isoformat(report.created_at),
        "status": report.status.label,
    }


def report_to_json(report: WorkReport, created_by: str) -> dict:
    data = report_row_to_json(report, created_by)
    data.update(
        {
            "userId": report.user_id,
            "tasks": report.tasks,
            "outcomes": report.outcomes,
            "challenges": report.challenges,
            "nextSteps": report.next_steps,
            "statusValue": report.status.value,
        }
    )
    return data
