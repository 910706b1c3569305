"""Game server panel application factory and bootstrap."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask

from gamepanel.config import config_by_name
from gamepanel.core.demo.context import init_demo
from gamepanel.domains.server.services import init_gateways
from gamepanel.extensions import db, init_extensions


def create_app(config_name: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create and configure the panel Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    if overrides:
        app.config.update(overrides)

    # Normalize relative sqlite paths to the project root to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    init_gateways(app)
    # Installed before any blueprint so demo calls are intercepted ahead of the views.
    init_demo(app)
    _register_blueprints(app)
    _register_error_handlers(app)

    with app.app_context():
        from gamepanel.core.auth import models  # noqa: F401  register tables

        db.create_all()

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from gamepanel.scripts.commands import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from gamepanel.core.auth.controllers import auth_bp
    from gamepanel.core.demo.controllers import demo_bp
    from gamepanel.domains.server.controllers import backup_api_bp, player_api_bp, server_api_bp

    app.register_blueprint(demo_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(server_api_bp, url_prefix="/api/server")
    app.register_blueprint(player_api_bp, url_prefix="/api/players")
    app.register_blueprint(backup_api_bp, url_prefix="/api/backups")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500
