"""Demo mode wiring: one context object per app, explicit lifecycle."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, current_app

from gamepanel.core.auth.tokens import JWTTokenVerifier, TokenVerifier
from gamepanel.core.demo.actions import ActionRegistry, default_registry
from gamepanel.core.demo.middleware import DemoInterceptor
from gamepanel.core.demo.policy import DemoPolicy
from gamepanel.core.demo.scheduler import ResetScheduler, ResetState
from gamepanel.core.demo.session_store import Clock, DemoSessionStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = "demo"


class DemoContext:
    """Bundles registry, policy, session store, reset scheduler and token verifier."""

    def __init__(
        self,
        policy: DemoPolicy,
        sessions: DemoSessionStore,
        scheduler: ResetScheduler,
        verifier: Optional[TokenVerifier] = None,
        start_timer: bool = True,
    ):
        self.policy = policy
        self.sessions = sessions
        self.scheduler = scheduler
        self.verifier = verifier or JWTTokenVerifier()
        self.start_timer = start_timer

    @property
    def registry(self) -> ActionRegistry:
        return self.policy.registry

    @classmethod
    def from_config(
        cls,
        config,
        registry: Optional[ActionRegistry] = None,
        verifier: Optional[TokenVerifier] = None,
        clock: Optional[Clock] = None,
    ) -> "DemoContext":
        policy = DemoPolicy.from_config(config, registry=registry or default_registry())
        sessions = DemoSessionStore(clock=clock)
        scheduler = ResetScheduler(
            sessions,
            interval_hours=config.get("DEMO_RESET_INTERVAL_HOURS", 24),
            clock=clock,
        )
        return cls(
            policy=policy,
            sessions=sessions,
            scheduler=scheduler,
            verifier=verifier,
            start_timer=config.get("DEMO_RESET_TIMER", True),
        )

    def initialize(self) -> None:
        if not self.policy.is_enabled():
            return
        self.scheduler.initialize(start_timer=self.start_timer)

    def reset(self) -> ResetState:
        return self.scheduler.perform_reset()

    def shutdown(self) -> None:
        self.scheduler.shutdown()


def init_demo(app: Flask, context: Optional[DemoContext] = None) -> DemoContext:
    """Attach a demo context to the app and install the request interceptor."""
    context = context or DemoContext.from_config(app.config)
    app.extensions[EXTENSION_KEY] = context
    app.before_request(DemoInterceptor(context))
    context.initialize()
    return context


def get_demo_context() -> DemoContext:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["DemoContext", "EXTENSION_KEY", "get_demo_context", "init_demo"]
