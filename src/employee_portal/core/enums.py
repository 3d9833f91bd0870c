from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class SaleStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkReportStatus(str, Enum):
    """Work report lifecycle as stored in the database."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    IN_PROGRESS = "in_progress"
    REVIEW_NEEDED = "review_needed"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        # "review_needed" -> "Review Needed"
        return self.value.replace("_", " ").title()


class AttendanceType(str, Enum):
    CHECK_IN = "checkin"
    CHECK_OUT = "checkout"
