from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    IdentityProviderError,
    NotFoundError,
    ValidationError,
)
from .validators import require_object


def json_body() -> Mapping[str, Any]:
    """Parsed JSON request body; anything but an object is a 400."""
    return require_object(request.get_json(silent=True) or {})


def error_response(message: str, status: int):
    return jsonify({"message": message}), status


def register_error_handlers(app: Flask) -> None:
    """Map domain exceptions to `{"message": ...}` JSON responses."""

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return error_response(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication_error(e: AuthenticationError):
        return error_response(str(e) or "Unauthorized access", 401)

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e: AuthorizationError):
        return error_response(str(e) or "Forbidden", 403)

    @app.errorhandler(NotFoundError)
    def _not_found_error(e: NotFoundError):
        return error_response(str(e) or "Not found", 404)

    @app.errorhandler(IdentityProviderError)
    def _identity_provider_error(e: IdentityProviderError):
        current_app.logger.warning("Identity provider error on %s %s: %s", request.method, request.path, e)
        return error_response("Authentication service unavailable", 500)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected_error(e: Exception):
        # Details stay in the server log; clients only get a generic message.
        current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)
