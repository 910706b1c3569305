"""Route-to-action registry used by the demo interceptor.

Every privileged API route is described once, as a ``RouteRule`` carrying the
path template, the HTTP method, the canonical action identifier
(``"<namespace>.<verb>"``) and whether demo callers get a simulated response
for it. Lookup precedence is fixed:

1. exact literal match on ``(path, method)``;
2. parameterized templates (``:name`` segments match one non-empty path
   segment), fewer wildcard segments first;
3. declaration order among templates with the same wildcard count.

A path that matches nothing resolves to ``None``, which the interceptor treats
as "pass through".
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

PARAM_PREFIX = ":"


def split_path(path: str) -> Tuple[str, ...]:
    """Split a path into segments, keeping empty segments so ``//`` never matches a parameter."""
    return tuple(path.strip("/").split("/")) if path.strip("/") else ()


def normalize_path(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


@dataclass(frozen=True)
class RouteRule:
    template: str
    method: str
    action: str
    simulate_for_demo: bool = True

    @property
    def segments(self) -> Tuple[str, ...]:
        return split_path(self.template)

    @property
    def wildcard_count(self) -> int:
        return sum(1 for segment in self.segments if segment.startswith(PARAM_PREFIX))

    @property
    def is_literal(self) -> bool:
        return self.wildcard_count == 0

    def matches(self, segments: Tuple[str, ...]) -> bool:
        own = self.segments
        if len(own) != len(segments):
            return False
        for expected, actual in zip(own, segments):
            if expected.startswith(PARAM_PREFIX):
                if not actual:
                    return False
            elif expected != actual:
                return False
        return True


def route(template: str, simulate: bool = True, **methods: str) -> List[RouteRule]:
    """Build one rule per ``METHOD=action`` keyword for a template."""
    return [
        RouteRule(template=template, method=method.upper(), action=action, simulate_for_demo=simulate)
        for method, action in methods.items()
    ]


class ActionRegistry:
    """Ordered, immutable table of route rules."""

    def __init__(self, rules: Iterable[RouteRule]):
        self._rules: Tuple[RouteRule, ...] = tuple(rules)
        self._literal: Dict[Tuple[str, str], RouteRule] = {}
        self._flags: Dict[str, bool] = {}
        patterned: List[Tuple[int, int, RouteRule]] = []

        seen: set[Tuple[str, str]] = set()
        for index, rule in enumerate(self._rules):
            key = (normalize_path(rule.template), rule.method)
            if key in seen:
                raise ValueError(f"duplicate_route_rule:{rule.method} {rule.template}")
            seen.add(key)

            flag = self._flags.setdefault(rule.action, rule.simulate_for_demo)
            if flag != rule.simulate_for_demo:
                raise ValueError(f"conflicting_simulate_flag:{rule.action}")

            if rule.is_literal:
                self._literal[key] = rule
            else:
                patterned.append((rule.wildcard_count, index, rule))

        patterned.sort(key=lambda item: (item[0], item[1]))
        self._patterned: Tuple[RouteRule, ...] = tuple(rule for _, _, rule in patterned)

    def resolve(self, path: str, method: str) -> Optional[str]:
        rule = self.match(path, method)
        return rule.action if rule else None

    def match(self, path: str, method: str) -> Optional[RouteRule]:
        """Return the winning rule for a request, or None."""
        if not path or not method:
            return None
        path = normalize_path(path)
        method = method.upper()

        literal = self._literal.get((path, method))
        if literal:
            return literal

        segments = split_path(path)
        for rule in self._patterned:
            if rule.method == method and rule.matches(segments):
                return rule
        return None

    def rules(self) -> Tuple[RouteRule, ...]:
        return self._rules

    def actions(self) -> frozenset[str]:
        return frozenset(self._flags)

    def simulated_actions(self) -> frozenset[str]:
        return frozenset(action for action, simulate in self._flags.items() if simulate)

    def is_simulated(self, action: str) -> bool:
        return self._flags.get(action, False)


DEFAULT_ROUTE_RULES: Tuple[RouteRule, ...] = tuple(
    # Read routes, declared so the table states they are never faked.
    route("/api/server/status", simulate=False, GET="server.view_status")
    + route("/api/players", simulate=False, GET="players.view")
    + route("/api/backups", simulate=False, GET="backups.view")
    + route("/api/auth/users", simulate=False, GET="users.view")
    # Server
    + route("/api/server/start", POST="server.start")
    + route("/api/server/stop", POST="server.stop")
    + route("/api/server/restart", POST="server.restart")
    + route("/api/server/quick-settings", PUT="config.edit")
    + route("/api/server/config", PUT="config.edit")
    + route("/api/server/config/:file", PUT="config.edit")
    + route("/api/server/patchline", PUT="config.edit")
    # Console
    + route("/api/console/command", POST="console.execute")
    # Players
    + route("/api/players", POST="players.kick")
    + route("/api/players/:name/kick", POST="players.kick")
    + route("/api/players/:name/ban", POST="players.ban", DELETE="players.unban")
    + route("/api/players/:name/teleport", POST="players.teleport")
    + route("/api/players/:name/teleport/death", POST="players.teleport")
    + route("/api/players/:name/kill", POST="players.kill")
    + route("/api/players/:name/heal", POST="players.heal")
    + route("/api/players/:name/gamemode", POST="players.gamemode")
    + route("/api/players/:name/give", POST="players.give")
    + route("/api/players/:name/effect", POST="players.effects")
    + route("/api/players/:name/inventory/clear", POST="players.clear_inventory")
    + route("/api/players/:name/message", POST="players.message")
    + route("/api/players/:name/whitelist", POST="players.whitelist", DELETE="players.whitelist")
    + route("/api/players/:name/op", POST="players.op", DELETE="players.op")
    + route("/api/players/:name/respawn", POST="players.respawn")
    + route("/api/players/:name/deaths", POST="players.edit")
    + route("/api/management/whitelist", POST="players.whitelist", PUT="players.whitelist", DELETE="players.whitelist")
    + route("/api/management/whitelist/:name", DELETE="players.whitelist")
    + route("/api/management/bans", POST="players.ban", DELETE="players.unban")
    + route("/api/management/bans/:name", DELETE="players.unban")
    + route(
        "/api/management/permissions",
        POST="players.permissions",
        PUT="players.permissions",
        DELETE="players.permissions",
    )
    + route("/api/management/permissions/users/:name", DELETE="players.permissions")
    + route("/api/management/permissions/groups/:name", DELETE="players.permissions")
    # Backups
    + route("/api/backups", POST="backups.create", DELETE="backups.delete")
    + route("/api/backups/restore", POST="backups.restore")
    + route("/api/backups/:id", DELETE="backups.delete")
    + route("/api/backups/:id/restore", POST="backups.restore")
    # Scheduler
    + route("/api/scheduler", POST="scheduler.edit", PUT="scheduler.edit", DELETE="scheduler.edit")
    + route("/api/scheduler/tasks", POST="scheduler.edit", PUT="scheduler.edit", DELETE="scheduler.edit")
    + route("/api/scheduler/tasks/:id", PUT="scheduler.edit", DELETE="scheduler.edit")
    + route("/api/scheduler/config", PUT="scheduler.edit")
    + route("/api/scheduler/backup/run", POST="backups.create")
    + route("/api/scheduler/quick-commands", POST="scheduler.edit")
    + route("/api/scheduler/quick-commands/:id", PUT="scheduler.edit", DELETE="scheduler.edit")
    + route("/api/scheduler/quick-commands/:id/execute", POST="scheduler.edit")
    + route("/api/scheduler/broadcast", POST="scheduler.edit")
    + route("/api/scheduler/restart/cancel", POST="scheduler.edit")
    # Assets
    + route("/api/assets/extract", POST="assets.manage")
    + route("/api/assets/cache", DELETE="assets.manage")
    # KyuubiSoft API plugin
    + route("/api/server/plugin/install", POST="mods.install")
    + route("/api/server/plugin/uninstall", DELETE="mods.install")
    # Worlds
    + route("/api/management/worlds", POST="worlds.manage", PUT="worlds.manage", DELETE="worlds.manage")
    # Mods
    + route("/api/management/mods", POST="mods.install", DELETE="mods.delete")
    + route("/api/management/mods/upload", POST="mods.install")
    + route("/api/management/mods/toggle", POST="mods.toggle")
    + route("/api/management/mods/config", PUT="mods.config")
    + route("/api/management/mods/:name", DELETE="mods.delete")
    # Plugins
    + route("/api/management/plugins", POST="plugins.install", DELETE="plugins.delete")
    + route("/api/management/plugins/upload", POST="plugins.install")
    + route("/api/management/plugins/toggle", POST="plugins.toggle")
    + route("/api/management/plugins/config", PUT="plugins.config")
    + route("/api/management/plugins/:name", DELETE="plugins.delete")
    # Users and roles
    + route("/api/auth/users", POST="users.create", PUT="users.edit", DELETE="users.delete")
    + route("/api/auth/users/:username", PUT="users.edit", DELETE="users.delete")
    + route("/api/roles", POST="roles.manage", PUT="roles.manage", DELETE="roles.manage")
    + route("/api/roles/:id", PUT="roles.manage", DELETE="roles.manage")
    # Settings
    + route("/api/management/settings", PUT="settings.edit")
    # Hytale account auth
    + route("/api/auth/hytale/initiate", POST="hytale_auth.manage")
    + route("/api/auth/hytale/reset", POST="hytale_auth.manage")
    + route("/api/auth/hytale/persistence", POST="hytale_auth.manage")
    # Chat
    + route("/api/chat/send", POST="chat.send")
    # Activity log
    + route("/api/management/activity", DELETE="activity.clear")
)


@lru_cache(maxsize=1)
def default_registry() -> ActionRegistry:
    return ActionRegistry(DEFAULT_ROUTE_RULES)


__all__ = [
    "ActionRegistry",
    "DEFAULT_ROUTE_RULES",
    "RouteRule",
    "default_registry",
    "normalize_path",
    "route",
    "split_path",
]
