import pytest

pytestmark = pytest.mark.integration

from gamepanel.core.auth.auth_service import get_user


def test_create_user_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-user", "--username", "ops", "--password", "secret123", "--role", "admin"])

    assert result.exit_code == 0, result.output
    assert "created user ops role=admin" in result.output
    with app.app_context():
        assert get_user("ops").role == "admin"


def test_create_user_rejects_reserved_name(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-user", "--username", "__demo__", "--password", "secret123"])

    assert result.exit_code != 0
    assert "reserved_username" in result.output


def test_demo_actions_resolves_single_path(demo_app):
    runner = demo_app.test_cli_runner()
    result = runner.invoke(args=["demo-actions", "--path", "/api/players/alice/kick"])

    assert result.exit_code == 0, result.output
    assert "demo mode: enabled" in result.output
    assert "POST /api/players/alice/kick -> players.kick [simulated]" in result.output


def test_demo_actions_reports_read_and_unmapped_routes(app):
    runner = app.test_cli_runner()

    read = runner.invoke(args=["demo-actions", "--path", "/api/auth/users", "--method", "get"])
    assert "GET /api/auth/users -> users.view [executed]" in read.output

    unmapped = runner.invoke(args=["demo-actions", "--path", "/api/nowhere"])
    assert "POST /api/nowhere -> (unmapped, passes through)" in unmapped.output


def test_demo_actions_lists_table(app):
    result = app.test_cli_runner().invoke(args=["demo-actions"])
    assert result.exit_code == 0
    assert "backups.create" in result.output
    assert "simulated" in result.output
