from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

import httpx

from ..core.exceptions import IdentityProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalIdentity:
    """Identity returned by the provider after verifying a bearer token."""

    subject: str
    email: str


class IdentityProvider(Protocol):
    def verify(self, token: str) -> Optional[ExternalIdentity]:
        """Return the identity behind `token`, or None when the token is rejected."""

        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class SupabaseIdentityProvider(IdentityProvider):
    """Verify access tokens against Supabase Auth (`GET /auth/v1/user`)."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        if not base_url:
            raise ValueError("SUPABASE_URL is required for the supabase identity provider")
        self._anon_key = anon_key
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def verify(self, token: str) -> Optional[ExternalIdentity]:
        try:
            resp = self._client.get(
                "/auth/v1/user",
                headers={"apikey": self._anon_key, "Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider request failed: %s", e)
            raise IdentityProviderError("Identity provider unavailable") from e

        if resp.status_code in (400, 401, 403, 404):
            return None
        if resp.status_code != 200:
            logger.warning("Identity provider answered HTTP %s", resp.status_code)
            raise IdentityProviderError(f"Identity provider answered HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise IdentityProviderError("Identity provider returned invalid JSON") from e

        email = (payload or {}).get("email")
        if not email:
            return None
        return ExternalIdentity(subject=str(payload.get("id", "")), email=str(email))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class StaticIdentityProvider(IdentityProvider):
    """Fixed token -> email table for local development and tests."""

    def __init__(self, tokens: Mapping[str, str]):
        self._tokens = dict(tokens)

    def verify(self, token: str) -> Optional[ExternalIdentity]:
        email = self._tokens.get(token)
        if email is None:
            return None
        return ExternalIdentity(subject=token, email=email)

    def close(self) -> None:
        pass


def parse_static_tokens(value: str) -> dict[str, str]:
    """'tok1:alice@example.com,tok2:bob@example.com' -> {'tok1': 'alice@example.com', ...}."""
    tokens: dict[str, str] = {}
    for part in (value or "").split(","):
        token, sep, email = part.strip().partition(":")
        if sep and token.strip() and email.strip():
            tokens[token.strip()] = email.strip()
    return tokens


def build_identity_provider(settings) -> IdentityProvider:
    kind = str(getattr(settings, "IDENTITY_PROVIDER", "supabase")).lower()
    if kind == "supabase":
        return SupabaseIdentityProvider(
            getattr(settings, "SUPABASE_URL", ""),
            getattr(settings, "SUPABASE_ANON_KEY", ""),
            timeout=float(getattr(settings, "IDENTITY_TIMEOUT_SECONDS", 5.0)),
        )
    if kind == "static":
        tokens = getattr(settings, "STATIC_TOKENS", {})
        if isinstance(tokens, str):
            tokens = parse_static_tokens(tokens)
        return StaticIdentityProvider(tokens)
    raise ValueError(f"Unknown IDENTITY_PROVIDER: {kind!r}")
