from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from .decorators import auth_required, current_user


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.session_validator)

    @app.get("/api/auth/config", endpoint="auth_config")
    def auth_config():
        # Public: the browser client needs these to talk to the identity provider.
        return jsonify(container.auth_config)

    @app.get("/api/supabase-config", endpoint="supabase_config")
    def supabase_config():
        # Path and keys the existing browser client asks for.
        return jsonify({"url": container.auth_config["url"], "anon_key": container.auth_config["anonKey"]})

    @app.get("/api/auth/me", endpoint="auth_me")
    @login_required
    def me():
        return jsonify(current_user().to_json())
