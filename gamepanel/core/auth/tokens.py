"""JWT issuing and non-raising verification."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol, TypedDict

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


class VerifiedToken(TypedDict):
    username: str


class TokenVerifier(Protocol):
    def verify(self, token: str, kind: str) -> Optional[VerifiedToken]:
        """Return the token subject, or None for invalid, expired or wrong-kind tokens."""


class JWTTokenVerifier:
    """Verifier backed by flask-jwt-extended; needs an app context."""

    def verify(self, token: str, kind: str = ACCESS_TOKEN) -> Optional[VerifiedToken]:
        if not token:
            return None
        try:
            decoded = decode_token(token)
        except (JWTExtendedException, PyJWTError) as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return None
        if decoded.get("type") != kind:
            return None
        subject = decoded.get("sub")
        if not subject:
            return None
        return {"username": str(subject)}


def issue_tokens(username: str, roles: Iterable[str], permissions: Iterable[str]) -> dict[str, str]:
    """Create access and refresh tokens carrying role and permission claims."""
    claims = {"roles": list(roles), "permissions": list(permissions)}
    return {
        "access_token": create_access_token(identity=username, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=username, additional_claims=claims),
    }


__all__ = [
    "ACCESS_TOKEN",
    "REFRESH_TOKEN",
    "JWTTokenVerifier",
    "TokenVerifier",
    "VerifiedToken",
    "issue_tokens",
]
