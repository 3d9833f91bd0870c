from __future__ import annotations

import pytest

from employee_portal.auth.identity import StaticIdentityProvider, parse_static_tokens
from employee_portal.auth.session import SessionValidator, extract_bearer_token
from employee_portal.core.enums import Role
from employee_portal.core.exceptions import AuthenticationError


@pytest.fixture
def validator(storage):
    identity = StaticIdentityProvider({"good": "Staff@Example.com", "ghost": "ghost@example.com"})
    return SessionValidator(identity, storage.users)


def test_resolves_local_profile(validator):
    profile = validator.validate("Bearer good")
    assert profile.email == "staff@example.com"
    assert profile.role == Role.STAFF
    assert profile.display_name == "Staff Demo"
    assert profile.to_json()["id"] == str(profile.id)


@pytest.mark.parametrize("header", [None, "", "Bearer ", "Basic abc", "bearer good", "Bearer unknown", "Bearer ghost"])
def test_rejections_are_unauthorized(validator, header):
    with pytest.raises(AuthenticationError, match="Unauthorized access"):
        validator.validate(header)


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def") == "abc.def"
    assert extract_bearer_token("Token abc") is None


def test_parse_static_tokens():
    assert parse_static_tokens("a:x@example.com, b:y@example.com,broken,:z@example.com") == {
        "a": "x@example.com",
        "b": "y@example.com",
    }


def test_me_and_public_config(client, admin_headers):
    body = client.get("/api/auth/me", headers=admin_headers).get_json()
    assert body["role"] == "admin"
    assert body["email"] == "admin@example.com"

    assert client.get("/api/auth/config").get_json() == {"url": "http://identity.test", "anonKey": "test-anon-key"}


def test_supabase_config_alias_is_public(client):
    resp = client.get("/api/supabase-config")
    assert resp.status_code == 200
    assert resp.get_json() == {"url": "http://identity.test", "anon_key": "test-anon-key"}
