from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a newest-first listing plus the size of the whole listing."""

    items: list[T]
    total_count: int


def offset_for(page: int, limit: int) -> int:
    if page < 1:
        raise ValidationError("page must be at least 1")
    if limit < 1:
        raise ValidationError("limit must be at least 1")
    return (page - 1) * limit


def paginate(records: Sequence[T], page: int = DEFAULT_PAGE, limit: int = DEFAULT_PAGE_LIMIT) -> Page[T]:
    """Slice an already-ordered sequence: records[(page-1)*limit : page*limit]."""
    start = offset_for(page, limit)
    return Page(items=list(records[start : start + limit]), total_count=len(records))


def parse_page_args(
    page: Optional[str],
    limit: Optional[str],
    *,
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> tuple[int, int]:
    """Parse ?page=&limit= query values; missing values fall back to defaults."""

    def _parse(value: Optional[str], name: str, default: int) -> int:
        if value is None or not value.strip():
            return default
        try:
            number = int(value)
        except ValueError:
            raise ValidationError(f"{name} must be a positive integer")
        if number < 1:
            raise ValidationError(f"{name} must be a positive integer")
        return number

    return _parse(page, "page", DEFAULT_PAGE), min(_parse(limit, "limit", default_limit), MAX_PAGE_LIMIT)
