from __future__ import annotations

import itertools
import threading
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import DuplicateError
from .model import User
from .repository import UserRepository


class MemoryUserRepository(UserRepository):
    """Process-local user store for development and tests."""

    def __init__(self):
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in list(self._users.values()) if u.username == username), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in list(self._users.values()) if u.email == email), None)

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: Role,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        with self._lock:
            if any(u.username == username or u.email == email for u in self._users.values()):
                raise DuplicateError("Username or email already registered")

            user = User(
                user_id=next(self._ids),
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
                created_at=now_local(),
                full_name=full_name,
                avatar_url=avatar_url,
            )
            self._users[user.user_id] = user
            return user

    def count(self) -> int:
        return len(self._users)
