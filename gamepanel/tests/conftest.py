import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gamepanel import create_app
from gamepanel.core.auth.auth_service import create_user, issue_user_tokens
from gamepanel.core.auth.schemas import UserCreateRequest
from gamepanel.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (app, database, API)")
    config.addinivalue_line("markers", "slow: Slow running tests")


def _build_app(overrides=None):
    """
    Create a per-test app backed by an in-memory database.

    No app context stays pushed while requests run, so every request gets a
    fresh ``g`` just like in production.
    """
    app = create_app("testing", overrides)
    yield app
    app.extensions["demo"].shutdown()
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app():
    yield from _build_app()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def demo_app():
    """Demo mode on; the reset timer stays disarmed (DEMO_RESET_TIMER is off for testing)."""
    yield from _build_app({"DEMO_MODE_ENABLED": True})


@pytest.fixture()
def demo_client(demo_app):
    return demo_app.test_client()


def _user_headers(app, username: str, role: str) -> dict[str, str]:
    with app.app_context():
        user = create_user(UserCreateRequest(username=username, password="secret123", role=role))
        tokens = issue_user_tokens(user)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.fixture()
def admin_headers(app):
    return _user_headers(app, "admin", "admin")


@pytest.fixture()
def viewer_headers(app):
    return _user_headers(app, "viewer", "viewer")


@pytest.fixture()
def demo_admin_headers(demo_app):
    return _user_headers(demo_app, "admin", "admin")


@pytest.fixture()
def demo_login(demo_client):
    """Log in as the demo identity and return the login payload."""
    resp = demo_client.post("/api/auth/demo")
    assert resp.status_code == 200
    return resp.get_json()


@pytest.fixture()
def demo_headers(demo_login):
    return {"Authorization": f"Bearer {demo_login['access_token']}"}
