"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import jsonify
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from gamepanel.core.auth.roles import has_permission
from gamepanel.core.demo.context import get_demo_context
from gamepanel.core.demo.middleware import is_demo_request

F = TypeVar("F", bound=Callable)


def require_permission(permission: str):
    """Enforce that the current access token grants ``permission``."""

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):  # type: ignore[misc]
            try:
                verify_jwt_in_request()
            except (JWTExtendedException, PyJWTError):
                return jsonify({"ok": False, "error": "unauthorized"}), 401
            claims = get_jwt() or {}
            policy = get_demo_context().policy
            if policy.is_demo_token(claims):
                if not policy.is_enabled():
                    return jsonify({"ok": False, "error": "demo_disabled"}), 403
                if not policy.allows_real(permission):
                    return jsonify({"ok": False, "error": "demo_restricted"}), 403
            if has_permission(claims.get("permissions"), permission):
                return fn(*args, **kwargs)
            error = "demo_restricted" if is_demo_request() else "forbidden"
            return jsonify({"ok": False, "error": error}), 403

        return wrapper  # type: ignore[return-value]

    return decorator
