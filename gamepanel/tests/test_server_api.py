import pytest

pytestmark = pytest.mark.integration


@pytest.fixture()
def gateway(app):
    return app.extensions["server_gateway"]


def test_status_requires_auth(client):
    assert client.get("/api/server/status").status_code == 401


def test_viewer_can_read_status(client, viewer_headers):
    body = client.get("/api/server/status", headers=viewer_headers).get_json()
    assert body == {"ok": True, "status": "stopped", "players": 0}


def test_viewer_cannot_start_server(client, viewer_headers, gateway):
    resp = client.post("/api/server/start", headers=viewer_headers)
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "forbidden"
    assert gateway.operations == []


def test_admin_lifecycle(client, admin_headers, gateway):
    assert client.post("/api/server/start", headers=admin_headers).get_json()["status"] == "running"
    assert client.post("/api/server/restart", headers=admin_headers).get_json()["status"] == "running"
    assert client.post("/api/server/stop", headers=admin_headers).get_json()["status"] == "stopped"
    assert [op.name for op in gateway.operations] == ["server.start", "server.restart", "server.stop"]


def test_kick_player(client, admin_headers, gateway):
    gateway.players.extend(["alice", "bob"])

    resp = client.post("/api/players/alice/kick", headers=admin_headers)
    assert resp.status_code == 200
    assert gateway.online_players() == ["bob"]
    assert gateway.operations[-1].target == "alice"

    missing = client.post("/api/players/alice/kick", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "player_not_found"


def test_backup_lifecycle(client, admin_headers, gateway):
    created = client.post("/api/backups", json={"name": "before-update"}, headers=admin_headers)
    assert created.status_code == 201
    backup_id = created.get_json()["backup"]["id"]

    listed = client.get("/api/backups", headers=admin_headers).get_json()["backups"]
    assert [b["id"] for b in listed] == [backup_id]

    restored = client.post(f"/api/backups/{backup_id}/restore", headers=admin_headers)
    assert restored.status_code == 200

    deleted = client.delete(f"/api/backups/{backup_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.delete(f"/api/backups/{backup_id}", headers=admin_headers).status_code == 404

    assert [op.name for op in gateway.operations] == ["backups.create", "backups.restore", "backups.delete"]


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}
