"""Early caller identification for the demo interceptor."""

from __future__ import annotations

from typing import Optional

from gamepanel.core.auth.tokens import ACCESS_TOKEN, TokenVerifier

BEARER_PREFIX = "Bearer "


def resolve_caller(authorization_header: Optional[str], verifier: TokenVerifier) -> Optional[str]:
    """Return the username behind a bearer access token, or None.

    Never raises: a missing or bad credential is a valid outcome here because
    the real auth checks further down reject unauthenticated calls.
    """
    if not authorization_header or not authorization_header.startswith(BEARER_PREFIX):
        return None
    token = authorization_header[len(BEARER_PREFIX):].strip()
    if not token:
        return None
    result = verifier.verify(token, ACCESS_TOKEN)
    if not result:
        return None
    return result.get("username") or None


__all__ = ["BEARER_PREFIX", "resolve_caller"]
