"""Request interceptor that answers mutating demo calls with a simulated success."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import g, jsonify, request

from gamepanel.core.demo.identity import resolve_caller
from gamepanel.core.demo.responses import create_simulated_response

if TYPE_CHECKING:
    from gamepanel.core.demo.context import DemoContext

logger = logging.getLogger(__name__)


class DemoInterceptor:
    """``before_request`` hook. Returning a response stops Flask before the view runs."""

    def __init__(self, context: "DemoContext"):
        self.context = context

    def __call__(self):
        if not self.context.policy.is_enabled():
            return None
        try:
            return self._intercept()
        except Exception:
            # Availability over sandboxing: an internal failure never blocks the request.
            logger.exception("Demo interception failed for %s %s; passing through", request.method, request.path)
            return None

    def _intercept(self):
        policy = self.context.policy
        username = g.get("user") or resolve_caller(request.headers.get("Authorization"), self.context.verifier)
        if not policy.is_demo_user(username):
            return None

        g.is_demo = True
        g.user = username

        action = self.context.registry.resolve(request.path, request.method)
        if not policy.should_simulate(username, action):
            return None

        envelope = create_simulated_response(action)
        logger.info("Simulated %s for demo user (%s %s)", action, request.method, request.path)
        return jsonify(envelope.model_dump()), 200


def is_demo_request() -> bool:
    """True when the interceptor marked the current request as coming from the demo identity."""
    return bool(g.get("is_demo", False))


__all__ = ["DemoInterceptor", "is_demo_request"]
