"""Built-in roles and the permission codes they grant."""

from __future__ import annotations

ALL_PERMISSIONS = "*"

VIEW_PERMISSIONS = (
    "dashboard.view",
    "server.view_status",
    "console.view",
    "players.view",
    "chat.view",
    "backups.view",
    "scheduler.view",
    "worlds.view",
    "mods.view",
    "plugins.view",
    "config.view",
    "assets.view",
    "activity.view",
)

ROLE_PERMISSIONS: dict[str, tuple[str, ...]] = {
    "admin": (ALL_PERMISSIONS,),
    "moderator": VIEW_PERMISSIONS
    + (
        "server.start",
        "server.stop",
        "server.restart",
        "console.execute",
        "players.kick",
        "players.ban",
        "players.unban",
        "players.whitelist",
        "chat.send",
        "backups.create",
    ),
    "viewer": VIEW_PERMISSIONS,
}


def permissions_for_role(role: str) -> list[str]:
    return list(ROLE_PERMISSIONS.get(role, ()))


def has_permission(granted, permission: str) -> bool:
    granted = set(granted or ())
    return ALL_PERMISSIONS in granted or permission in granted


__all__ = ["ALL_PERMISSIONS", "ROLE_PERMISSIONS", "VIEW_PERMISSIONS", "has_permission", "permissions_for_role"]
