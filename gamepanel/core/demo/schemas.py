"""Typed payloads for demo mode IO."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class SimulatedResponse(BaseModel):
    success: bool = True
    message: str
    simulated: Literal[True] = True


class DemoLoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: Literal["bearer"] = "bearer"
    role: str
    permissions: List[str]
    is_demo: Literal[True] = Field(default=True, serialization_alias="isDemo")
    expires_at: datetime = Field(serialization_alias="expiresAt")


class ResetInfo(BaseModel):
    last_reset: Optional[datetime] = Field(default=None, serialization_alias="lastReset")
    next_reset: Optional[datetime] = Field(default=None, serialization_alias="nextReset")
    reset_interval_hours: float = Field(serialization_alias="resetIntervalHours")


class DemoStatusResponse(BaseModel):
    enabled: bool
    is_demo: bool = Field(serialization_alias="isDemo")
    reset_info: Optional[ResetInfo] = Field(default=None, serialization_alias="resetInfo")
    active_sessions: int = Field(default=0, serialization_alias="activeSessions")


__all__ = ["DemoLoginResponse", "DemoStatusResponse", "ResetInfo", "SimulatedResponse"]
