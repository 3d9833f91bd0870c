from __future__ import annotations

from functools import wraps

from flask import g, request

from .session import SessionValidator, UserProfile


def auth_required(validator: SessionValidator):
    """Build a view decorator that puts the caller's profile on `g.current_user`.

    Failures raise AuthenticationError, which the app turns into a 401.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = validator.validate(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_user() -> UserProfile:
    return g.current_user
