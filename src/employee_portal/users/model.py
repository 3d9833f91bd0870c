from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a portal account.

    Note: plain data object, no database access code here.
    """

    user_id: int
    username: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
