"""In-process stand-ins for the game server process and the backup store.

The real process control and file-system backup mechanics live outside this
service; these gateways keep the panel's API contract and record every
mutation they receive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import uuid4

logger = logging.getLogger(__name__)

STATUS_RUNNING = "running"
STATUS_STOPPED = "stopped"


@dataclass
class Operation:
    name: str
    target: Optional[str] = None
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Backup:
    id: str
    name: str
    created_at: datetime
    size_bytes: int = 0


class ServerGateway:
    """Server process state plus an append-only log of mutations."""

    def __init__(self, players: Optional[List[str]] = None):
        self._lock = Lock()
        self.status = STATUS_STOPPED
        self.players: List[str] = list(players or [])
        self.operations: List[Operation] = []

    def record(self, name: str, target: Optional[str] = None) -> None:
        self.operations.append(Operation(name=name, target=target))
        logger.info("Server operation %s%s", name, f" ({target})" if target else "")

    def start(self) -> str:
        with self._lock:
            self.status = STATUS_RUNNING
            self.record("server.start")
            return self.status

    def stop(self) -> str:
        with self._lock:
            self.status = STATUS_STOPPED
            self.players.clear()
            self.record("server.stop")
            return self.status

    def restart(self) -> str:
        with self._lock:
            self.status = STATUS_RUNNING
            self.record("server.restart")
            return self.status

    def online_players(self) -> List[str]:
        with self._lock:
            return list(self.players)

    def kick(self, name: str) -> None:
        with self._lock:
            if name not in self.players:
                raise ValueError("player_not_found")
            self.players.remove(name)
            self.record("players.kick", name)


class BackupCatalog:
    def __init__(self, gateway: ServerGateway):
        self.gateway = gateway
        self._lock = Lock()
        self._backups: Dict[str, Backup] = {}

    def list_backups(self) -> List[Backup]:
        with self._lock:
            return sorted(self._backups.values(), key=lambda b: b.created_at, reverse=True)

    def create(self, name: Optional[str] = None) -> Backup:
        now = datetime.now(timezone.utc)
        backup = Backup(
            id=uuid4().hex[:12],
            name=name or f"backup-{now.strftime('%Y%m%d-%H%M%S')}",
            created_at=now,
        )
        with self._lock:
            self._backups[backup.id] = backup
            self.gateway.record("backups.create", backup.id)
        return backup

    def delete(self, backup_id: str) -> None:
        with self._lock:
            if backup_id not in self._backups:
                raise ValueError("not_found")
            del self._backups[backup_id]
            self.gateway.record("backups.delete", backup_id)

    def restore(self, backup_id: str) -> Backup:
        with self._lock:
            backup = self._backups.get(backup_id)
            if not backup:
                raise ValueError("not_found")
            self.gateway.record("backups.restore", backup_id)
            return backup


def init_gateways(app) -> None:
    gateway = ServerGateway()
    app.extensions["server_gateway"] = gateway
    app.extensions["backup_catalog"] = BackupCatalog(gateway)


__all__ = [
    "Backup",
    "BackupCatalog",
    "Operation",
    "STATUS_RUNNING",
    "STATUS_STOPPED",
    "ServerGateway",
    "init_gateways",
]
