from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from werkzeug.security import generate_password_hash

from ..auth.session import UserProfile
from ..common.validators import optional_text, require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewUser:
    username: str
    email: str
    password: str
    role: Role
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "NewUser":
        role_s = data.get("role") or Role.STAFF.value
        try:
            role = Role(role_s)
        except ValueError:
            raise ValidationError("role must be one of: admin, staff")

        return cls(
            username=require_non_empty(data.get("username"), "username"),
            email=require_email(data.get("email")),
            password=require_min_length(data.get("password"), "password", 6),
            role=role,
            full_name=optional_text(data.get("fullName"), "fullName"),
            avatar_url=optional_text(data.get("avatarUrl"), "avatarUrl"),
        )


class UserService:
    """Use case: register portal accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(self, new_user: NewUser, *, creator: Optional[UserProfile] = None) -> User:
        """Register an account. Only an authenticated admin may create another admin."""
        if new_user.role == Role.ADMIN and (creator is None or not creator.is_admin):
            raise AuthorizationError("Only administrators can create admin accounts")
        if self._users.get_by_email(new_user.email):
            raise ValidationError("User with this email already exists")
        if self._users.get_by_username(new_user.username):
            raise ValidationError("Username already taken")

        user = self._users.create(
            username=new_user.username,
            email=new_user.email,
            password_hash=generate_password_hash(new_user.password),
            role=new_user.role,
            full_name=new_user.full_name,
            avatar_url=new_user.avatar_url,
        )
        logger.info("Created %s account %s (id=%s)", user.role.value, user.username, user.user_id)
        return user


def user_to_json(user: User) -> dict:
    return {
        "id": user.user_id,
        "username": user.username,
        "email": user.email,
        "role": user.role.value,
        "fullName": user.full_name,
        "avatarUrl": user.avatar_url,
        "createdAt": user.created_at.isoformat(),
    }
