from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.repository import UserRepository
from .identity import IdentityProvider

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class UserProfile:
    """What a protected handler receives about the caller."""

    id: int
    username: str
    role: Role
    email: str
    avatar_url: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_json(self) -> dict:
        return {
            "id": str(self.id),
            "username": self.username,
            "role": self.role.value,
            "avatar_url": self.avatar_url,
            "full_name": self.full_name,
            "email": self.email,
        }


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


class SessionValidator:
    """Resolve an Authorization header to a local user.

    No local session store: the token is verified by the identity provider on
    every request and the returned email is matched against the users table.
    """

    def __init__(self, identity: IdentityProvider, users: UserRepository):
        self._identity = identity
        self._users = users

    def validate(self, authorization: Optional[str]) -> UserProfile:
        token = extract_bearer_token(authorization)
        if token is None:
            raise AuthenticationError("Unauthorized access")

        identity = self._identity.verify(token)
        if identity is None:
            logger.info("Bearer token rejected by identity provider")
            raise AuthenticationError("Unauthorized access")

        user = self._users.get_by_email(identity.email.strip().lower())
        if user is None:
            logger.info("No local user for verified identity %s", identity.subject)
            raise AuthenticationError("Unauthorized access")

        return UserProfile(
            id=user.user_id,
            username=user.username,
            role=user.role,
            email=user.email,
            avatar_url=user.avatar_url,
            full_name=user.full_name,
        )
