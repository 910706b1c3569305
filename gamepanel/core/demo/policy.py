"""Demo policy: which calls from the demo identity get simulated."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from gamepanel.core.demo.actions import ActionRegistry, default_registry
from gamepanel.core.demo.constants import DEMO_PERMISSIONS, DEMO_READ_PERMISSIONS, DEMO_ROLE_ID, DEMO_USERNAME

logger = logging.getLogger(__name__)


class DemoPolicy:
    """Boolean gate over (identity, action).

    The allow-list defaults to the registry's ``simulate_for_demo`` flags. An
    explicit ``simulated_actions`` list replaces it; drift between that list and
    the registry is logged, never raised.
    """

    def __init__(
        self,
        enabled: bool,
        registry: Optional[ActionRegistry] = None,
        simulated_actions: Optional[Iterable[str]] = None,
    ):
        self.enabled = bool(enabled)
        self.registry = registry or default_registry()
        configured = frozenset(simulated_actions or ())
        if configured:
            self._warn_on_drift(configured)
            self.simulated_actions = configured
        else:
            self.simulated_actions = self.registry.simulated_actions()

    @classmethod
    def from_config(cls, config, registry: Optional[ActionRegistry] = None) -> "DemoPolicy":
        return cls(
            enabled=config.get("DEMO_MODE_ENABLED", False),
            registry=registry,
            simulated_actions=config.get("DEMO_SIMULATED_ACTIONS") or None,
        )

    def is_enabled(self) -> bool:
        return self.enabled

    def is_demo_user(self, identity: Optional[str]) -> bool:
        return identity == DEMO_USERNAME

    def is_demo_token(self, claims: Mapping[str, Any]) -> bool:
        """Demo tokens are recognised by subject or role, whether or not demo mode is on."""
        return self.is_demo_user(claims.get("sub")) or DEMO_ROLE_ID in (claims.get("roles") or ())

    def allows_real(self, permission: str) -> bool:
        """Whether a demo token may reach the real handler guarded by ``permission``."""
        return self.enabled and permission in DEMO_READ_PERMISSIONS

    def should_simulate(self, identity: Optional[str], action: Optional[str]) -> bool:
        if not self.enabled:
            return False
        if not self.is_demo_user(identity):
            return False
        if not action:
            # Unmapped routes pass through; real permission checks still apply.
            return False
        return action in self.simulated_actions

    def demo_permissions(self) -> list[str]:
        return list(DEMO_PERMISSIONS)

    def _warn_on_drift(self, configured: frozenset[str]) -> None:
        unknown = sorted(configured - self.registry.actions())
        if unknown:
            logger.warning("Simulated actions not present in the action registry: %s", ", ".join(unknown))
        executed = sorted(self.registry.simulated_actions() - configured)
        if executed:
            logger.warning(
                "Registry actions flagged for simulation but missing from DEMO_SIMULATED_ACTIONS "
                "will run for real for demo users: %s",
                ", ".join(executed),
            )


__all__ = ["DemoPolicy"]
