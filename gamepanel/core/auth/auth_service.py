"""Authentication service layer."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func

from gamepanel.core.auth.models import User
from gamepanel.core.auth.password import hash_password, verify_password
from gamepanel.core.auth.roles import permissions_for_role
from gamepanel.core.auth.schemas import UserCreateRequest
from gamepanel.core.auth.tokens import issue_tokens
from gamepanel.core.demo.constants import DEMO_USERNAME
from gamepanel.extensions import db

logger = logging.getLogger(__name__)

RESERVED_USERNAMES = frozenset({DEMO_USERNAME})


def authenticate_user(username: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = get_user(username)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user(username: str) -> Optional[User]:
    if not username:
        return None
    return User.query.filter(func.lower(User.username) == username.strip().lower()).first()


def list_users() -> list[User]:
    return User.query.order_by(User.username).all()


def create_user(payload: UserCreateRequest) -> User:
    """Create a panel user; the demo sentinel name is never assignable."""
    if payload.username.lower() in RESERVED_USERNAMES:
        raise ValueError("reserved_username")
    if get_user(payload.username):
        raise ValueError("username_taken")

    user = User(
        username=payload.username,
        password_hash=hash_password(payload.password),
        role=payload.role,
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Created user %s with role %s", user.username, user.role)
    return user


def issue_user_tokens(user: User) -> dict[str, str]:
    return issue_tokens(user.username, roles=[user.role], permissions=permissions_for_role(user.role))


__all__ = [
    "RESERVED_USERNAMES",
    "authenticate_user",
    "create_user",
    "get_user",
    "issue_user_tokens",
    "list_users",
]
