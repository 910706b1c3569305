"""Server, player and backup API controllers."""

from __future__ import annotations

import dataclasses

from flask import Blueprint, current_app, jsonify, request

from gamepanel.core.utils.decorators import require_permission
from gamepanel.domains.server.services import BackupCatalog, ServerGateway

server_api_bp = Blueprint("server_api", __name__)
player_api_bp = Blueprint("player_api", __name__)
backup_api_bp = Blueprint("backup_api", __name__)


def _gateway() -> ServerGateway:
    return current_app.extensions["server_gateway"]


def _backups() -> BackupCatalog:
    return current_app.extensions["backup_catalog"]


# --- server ---


@server_api_bp.get("/status")
@require_permission("server.view_status")
def server_status():
    gateway = _gateway()
    return jsonify({"ok": True, "status": gateway.status, "players": len(gateway.online_players())})


@server_api_bp.post("/start")
@require_permission("server.start")
def server_start():
    return jsonify({"ok": True, "success": True, "status": _gateway().start()})


@server_api_bp.post("/stop")
@require_permission("server.stop")
def server_stop():
    return jsonify({"ok": True, "success": True, "status": _gateway().stop()})


@server_api_bp.post("/restart")
@require_permission("server.restart")
def server_restart():
    return jsonify({"ok": True, "success": True, "status": _gateway().restart()})


# --- players ---


@player_api_bp.get("")
@require_permission("players.view")
def players_index():
    return jsonify({"ok": True, "players": _gateway().online_players()})


@player_api_bp.post("/<name>/kick")
@require_permission("players.kick")
def players_kick(name: str):
    try:
        _gateway().kick(name)
    except ValueError:
        return jsonify({"ok": False, "error": "player_not_found"}), 404
    return jsonify({"ok": True, "success": True})


# --- backups ---


def _serialize_backup(backup) -> dict:
    data = dataclasses.asdict(backup)
    data["created_at"] = backup.created_at.isoformat()
    return data


@backup_api_bp.get("")
@require_permission("backups.view")
def backups_index():
    return jsonify({"ok": True, "backups": [_serialize_backup(b) for b in _backups().list_backups()]})


@backup_api_bp.post("")
@require_permission("backups.create")
def backups_create():
    payload = request.get_json(silent=True) or {}
    backup = _backups().create(payload.get("name"))
    return jsonify({"ok": True, "success": True, "backup": _serialize_backup(backup)}), 201


@backup_api_bp.delete("/<backup_id>")
@require_permission("backups.delete")
def backups_delete(backup_id: str):
    try:
        _backups().delete(backup_id)
    except ValueError:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "success": True})


@backup_api_bp.post("/<backup_id>/restore")
@require_permission("backups.restore")
def backups_restore(backup_id: str):
    try:
        backup = _backups().restore(backup_id)
    except ValueError:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "success": True, "backup": _serialize_backup(backup)})
