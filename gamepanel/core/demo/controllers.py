"""Demo mode HTTP endpoints: demo login, status and manual reset."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, g, jsonify

from gamepanel.core.auth.tokens import issue_tokens
from gamepanel.core.demo.constants import DEMO_ROLE_ID, DEMO_USERNAME
from gamepanel.core.demo.context import DemoContext, get_demo_context
from gamepanel.core.demo.schemas import DemoLoginResponse, DemoStatusResponse, ResetInfo
from gamepanel.core.utils.decorators import require_permission
from gamepanel.extensions import limiter

logger = logging.getLogger(__name__)

demo_bp = Blueprint("demo_api", __name__)


def _reset_info(context: DemoContext) -> ResetInfo:
    state = context.scheduler.state()
    return ResetInfo(
        last_reset=state.last_reset,
        next_reset=state.next_reset,
        reset_interval_hours=state.reset_interval_hours,
    )


@demo_bp.post("/api/auth/demo")
@limiter.limit("10/minute")
def demo_login():
    """Issue tokens for the shared demo identity and record a demo session."""
    context = get_demo_context()
    if not context.policy.is_enabled():
        return jsonify({"ok": False, "error": "demo_disabled"}), 404

    session = context.sessions.create()
    permissions = context.policy.demo_permissions()
    tokens = issue_tokens(DEMO_USERNAME, roles=[DEMO_ROLE_ID], permissions=permissions)
    response = DemoLoginResponse(
        access_token=tokens["access_token"],
        refresh_token=tokens["refresh_token"],
        role=DEMO_ROLE_ID,
        permissions=permissions,
        expires_at=session.expires_at,
    )
    logger.info("Demo login issued (session %s)", session.session_id)
    return jsonify({"ok": True, **response.model_dump(mode="json", by_alias=True)})


@demo_bp.get("/api/demo/status")
def demo_status():
    context = get_demo_context()
    policy = context.policy
    enabled = policy.is_enabled()
    status = DemoStatusResponse(
        enabled=enabled,
        is_demo=enabled and policy.is_demo_user(g.get("user")),
        reset_info=_reset_info(context) if enabled else None,
        active_sessions=context.sessions.count_active() if enabled else 0,
    )
    return jsonify({"ok": True, **status.model_dump(mode="json", by_alias=True)})


@demo_bp.get("/api/server/demo")
def demo_banner():
    """Frontend probe: is this panel a demo instance?"""
    enabled = get_demo_context().policy.is_enabled()
    message = current_app.config.get("DEMO_BANNER_MESSAGE") if enabled else None
    return jsonify({"ok": True, "demoMode": enabled, "message": message})


@demo_bp.post("/api/demo/reset")
@require_permission("demo.reset")
def demo_reset():
    context = get_demo_context()
    if not context.policy.is_enabled():
        return jsonify({"ok": False, "error": "demo_disabled"}), 404
    context.reset()
    return jsonify({"ok": True, "resetInfo": _reset_info(context).model_dump(mode="json", by_alias=True)})
