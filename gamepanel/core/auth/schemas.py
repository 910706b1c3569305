"""Schemas for auth and user management IO."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gamepanel.core.auth.roles import ROLE_PERMISSIONS, permissions_for_role

if TYPE_CHECKING:
    from gamepanel.core.auth.models import User

_USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_.-]{3,64}$")


class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreateRequest(BaseModel):
    username: str
    password: str = Field(min_length=8)
    role: str = "viewer"

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not _USERNAME_REGEX.match(v):
            raise ValueError("username must be 3-64 chars of letters, digits, '_', '.', '-'")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in ROLE_PERMISSIONS:
            raise ValueError("unknown role")
        return v


class UserResponse(BaseModel):
    id: int
    username: str
    role: str
    is_active: bool
    permissions: List[str] = []

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        is_active=user.is_active,
        permissions=permissions_for_role(user.role),
    )
