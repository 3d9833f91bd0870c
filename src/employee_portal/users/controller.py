from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..common.http import json_body
from ..container import Container
from .service import NewUser, user_to_json


def register(app: Flask, container: Container) -> None:
    @app.post("/api/users", endpoint="create_user")
    def create_user():
        # Public, but a bearer token, when sent, must be valid and identifies the creator.
        header = request.headers.get("Authorization")
        creator = container.session_validator.validate(header) if header else None

        new_user = NewUser.from_payload(json_body())
        user = container.user_service.create_user(new_user, creator=creator)
        current_app.logger.info("Registered user id=%s", user.user_id)
        return jsonify(user_to_json(user)), 201
