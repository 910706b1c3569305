"""Demo identity constants."""

from __future__ import annotations

from datetime import timedelta

# Fixed, non-persisted identity shared by every demo login.
DEMO_USERNAME = "__demo__"
DEMO_ROLE_ID = "demo"

DEMO_SESSION_TTL = timedelta(hours=24)
DEMO_SESSION_PREFIX = "demo_"

# Read access everywhere; write permissions are listed so the UI enables the
# controls, the interceptor fakes the calls that carry them.
DEMO_PERMISSIONS: tuple[str, ...] = (
    "dashboard.view",
    "dashboard.stats",
    "server.view_status",
    "server.start",
    "server.stop",
    "server.restart",
    "server.quick_settings",
    "console.view",
    "console.execute",
    "performance.view",
    "players.view",
    "players.edit",
    "players.kick",
    "players.ban",
    "players.unban",
    "players.whitelist",
    "players.op",
    "players.permissions",
    "players.teleport",
    "players.kill",
    "players.respawn",
    "players.gamemode",
    "players.give",
    "players.heal",
    "players.effects",
    "players.clear_inventory",
    "players.message",
    "chat.view",
    "chat.send",
    "backups.view",
    "backups.create",
    "backups.restore",
    "backups.delete",
    "backups.download",
    "scheduler.view",
    "scheduler.edit",
    "worlds.view",
    "worlds.manage",
    "mods.view",
    "mods.install",
    "mods.delete",
    "mods.config",
    "mods.toggle",
    "plugins.view",
    "plugins.install",
    "plugins.delete",
    "plugins.config",
    "plugins.toggle",
    "config.view",
    "config.edit",
    "assets.view",
    "assets.manage",
    "users.view",
    "roles.view",
    "activity.view",
    "settings.view",
)

# The only permissions a demo token can exercise against a real handler.
DEMO_READ_PERMISSIONS: frozenset[str] = frozenset(
    permission
    for permission in DEMO_PERMISSIONS
    if permission.endswith(".view") or permission in ("server.view_status", "dashboard.stats")
)

__all__ = [
    "DEMO_USERNAME",
    "DEMO_ROLE_ID",
    "DEMO_SESSION_TTL",
    "DEMO_SESSION_PREFIX",
    "DEMO_PERMISSIONS",
    "DEMO_READ_PERMISSIONS",
]
