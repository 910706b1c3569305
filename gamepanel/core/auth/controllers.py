"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, jwt_required
from pydantic import ValidationError

from gamepanel.core.auth.auth_service import (
    authenticate_user,
    create_user,
    get_user,
    issue_user_tokens,
    list_users,
)
from gamepanel.core.auth.schemas import LoginRequest, UserCreateRequest, serialize_user
from gamepanel.core.demo.context import get_demo_context
from gamepanel.core.demo.middleware import is_demo_request
from gamepanel.core.utils.decorators import require_permission
from gamepanel.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


def _jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors()
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
    return errors


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "bad_request", "details": _jsonable_errors(exc)}), 400
    user = authenticate_user(data.username, data.password)
    if not user:
        return jsonify({"ok": False, "error": "invalid_credentials"}), 401
    tokens = issue_user_tokens(user)
    return jsonify({"ok": True, **tokens, "token_type": "bearer", "user": serialize_user(user).model_dump()})


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
@limiter.limit("30/minute")
def refresh():
    identity = str(get_jwt_identity())
    claims = get_jwt() or {}
    policy = get_demo_context().policy
    if policy.is_demo_token(claims) and not policy.is_enabled():
        return jsonify({"ok": False, "error": "demo_disabled"}), 403
    additional_claims = {key: claims[key] for key in ("roles", "permissions") if key in claims}
    access_token = create_access_token(identity=identity, additional_claims=additional_claims or None)
    return jsonify({"ok": True, "access_token": access_token})


@auth_bp.get("/me")
@jwt_required()
def me():
    claims = get_jwt() or {}
    username = str(get_jwt_identity())
    if is_demo_request():
        return jsonify(
            {
                "ok": True,
                "user": {"username": username, "role": "demo", "permissions": claims.get("permissions", [])},
                "isDemo": True,
            }
        )
    user = get_user(username)
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "user": serialize_user(user).model_dump(), "isDemo": False})


@auth_bp.get("/users")
@require_permission("users.view")
def users_index():
    return jsonify({"ok": True, "users": [serialize_user(user).model_dump() for user in list_users()]})


@auth_bp.post("/users")
@require_permission("users.create")
def users_create():
    payload = request.get_json(silent=True) or {}
    try:
        data = UserCreateRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "bad_request", "details": _jsonable_errors(exc)}), 400
    try:
        user = create_user(data)
    except ValueError as exc:
        code = str(exc)
        if code in ("username_taken", "reserved_username"):
            return jsonify({"ok": False, "error": code}), 400
        raise
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()}), 201
