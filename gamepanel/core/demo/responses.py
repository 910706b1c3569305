"""Simulated success envelopes returned to demo callers."""

from __future__ import annotations

from typing import Optional

from gamepanel.core.demo.schemas import SimulatedResponse

DEFAULT_SIMULATED_MESSAGE = "Action executed (demo)"

SIMULATED_MESSAGES: dict[str, str] = {
    "server.start": "Server is starting... (demo)",
    "server.stop": "Server is stopping... (demo)",
    "server.restart": "Server is restarting... (demo)",
    "console.execute": "Command executed (demo)",
    "players.kick": "Player was kicked (demo)",
    "players.ban": "Player was banned (demo)",
    "players.unban": "Player was unbanned (demo)",
    "players.whitelist": "Whitelist updated (demo)",
    "players.op": "Operator status changed (demo)",
    "players.permissions": "Permissions updated (demo)",
    "players.teleport": "Player was teleported (demo)",
    "players.kill": "Player was killed (demo)",
    "players.respawn": "Player is respawning (demo)",
    "players.heal": "Player was healed (demo)",
    "players.gamemode": "Game mode changed (demo)",
    "players.give": "Item given (demo)",
    "players.effects": "Effect applied (demo)",
    "players.clear_inventory": "Inventory cleared (demo)",
    "players.message": "Message sent (demo)",
    "players.edit": "Player data updated (demo)",
    "backups.create": "Backup is being created... (demo)",
    "backups.restore": "Backup is being restored... (demo)",
    "backups.delete": "Backup deleted (demo)",
    "scheduler.edit": "Schedule updated (demo)",
    "worlds.manage": "World settings saved (demo)",
    "mods.install": "Mod installed (demo)",
    "mods.delete": "Mod deleted (demo)",
    "mods.config": "Mod configuration saved (demo)",
    "mods.toggle": "Mod status changed (demo)",
    "plugins.install": "Plugin installed (demo)",
    "plugins.delete": "Plugin deleted (demo)",
    "plugins.config": "Plugin configuration saved (demo)",
    "plugins.toggle": "Plugin status changed (demo)",
    "config.edit": "Configuration saved (demo)",
    "assets.manage": "Assets updated (demo)",
    "users.create": "User created (demo)",
    "users.edit": "User updated (demo)",
    "users.delete": "User deleted (demo)",
    "roles.manage": "Role updated (demo)",
    "settings.edit": "Settings saved (demo)",
    "hytale_auth.manage": "Authentication updated (demo)",
    "chat.send": "Message sent (demo)",
    "activity.clear": "Activity log cleared (demo)",
}


def simulated_message(action: str) -> str:
    return SIMULATED_MESSAGES.get(action, DEFAULT_SIMULATED_MESSAGE)


def create_simulated_response(action: str, message: Optional[str] = None) -> SimulatedResponse:
    """Build the success envelope for an intercepted action."""
    return SimulatedResponse(success=True, message=message or simulated_message(action))


__all__ = [
    "DEFAULT_SIMULATED_MESSAGE",
    "SIMULATED_MESSAGES",
    "create_simulated_response",
    "simulated_message",
]
