"""Flask CLI commands for the panel.

Usage:
    flask create-user --username admin --password secret123 --role admin
    flask demo-actions                                  # list the route table
    flask demo-actions --path /api/players/alice/kick --method POST
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext
from pydantic import ValidationError

from gamepanel.core.auth.roles import ROLE_PERMISSIONS


@click.command("create-user")
@click.option("--username", required=True, help="Login name")
@click.option("--password", required=True, help="Password (min 8 chars)")
@click.option("--role", type=click.Choice(sorted(ROLE_PERMISSIONS)), default="viewer", show_default=True)
@with_appcontext
def create_user_command(username: str, password: str, role: str):
    """Create a panel user."""
    from gamepanel.core.auth.auth_service import create_user
    from gamepanel.core.auth.schemas import UserCreateRequest
    from gamepanel.extensions import db

    db.create_all()
    try:
        payload = UserCreateRequest(username=username, password=password, role=role)
        user = create_user(payload)
    except ValidationError as exc:
        click.echo(f"Invalid input: {exc.errors()[0]['msg']}", err=True)
        raise click.Abort()
    except ValueError as exc:
        click.echo(f"Could not create user: {exc}", err=True)
        raise click.Abort()
    click.echo(f"created user {user.username} role={user.role}")


@click.command("demo-actions")
@click.option("--path", help="Resolve a single request path instead of listing the table")
@click.option("--method", default="POST", show_default=True, help="HTTP method used with --path")
@with_appcontext
def demo_actions_command(path: str | None, method: str):
    """Show how requests map to actions and which ones demo users get simulated."""
    from gamepanel.core.demo.context import get_demo_context

    context = get_demo_context()
    policy = context.policy
    click.echo(f"demo mode: {'enabled' if policy.is_enabled() else 'disabled'}")

    if path:
        action = context.registry.resolve(path, method)
        if action is None:
            click.echo(f"{method.upper()} {path} -> (unmapped, passes through)")
            return
        mode = "simulated" if action in policy.simulated_actions else "executed"
        click.echo(f"{method.upper()} {path} -> {action} [{mode}]")
        return

    for rule in context.registry.rules():
        mode = "simulated" if rule.action in policy.simulated_actions else "executed"
        click.echo(f"{rule.method:<6} {rule.template:<48} {rule.action:<24} {mode}")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(create_user_command)
    app.cli.add_command(demo_actions_command)
