"""In-memory demo session store with lazy expiry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, Optional
from uuid import uuid4

from gamepanel.core.demo.constants import DEMO_SESSION_PREFIX, DEMO_SESSION_TTL, DEMO_USERNAME

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DemoSession:
    """Informational record of a demo login; never consulted for authz."""

    session_id: str
    username: str
    created_at: datetime
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return now < self.expires_at


class DemoSessionStore:
    """Sessions live until their TTL passes; expired ones are dropped on the next query."""

    def __init__(self, ttl: timedelta = DEMO_SESSION_TTL, clock: Optional[Clock] = None):
        self.ttl = ttl
        self._clock = clock or utcnow
        self._lock = Lock()
        self._sessions: Dict[str, DemoSession] = {}

    def create(self) -> DemoSession:
        now = self._clock()
        session = DemoSession(
            session_id=f"{DEMO_SESSION_PREFIX}{uuid4().hex}",
            username=DEMO_USERNAME,
            created_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._evict_expired_locked(now)
            self._sessions[session.session_id] = session
        return session

    def count_active(self) -> int:
        with self._lock:
            self._evict_expired_locked(self._clock())
            return len(self._sessions)

    def clear(self) -> int:
        """Drop every session; returns how many were removed."""
        with self._lock:
            removed = len(self._sessions)
            self._sessions.clear()
        return removed

    def _evict_expired_locked(self, now: datetime) -> None:
        expired = [sid for sid, session in self._sessions.items() if not session.is_active(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug("Evicted %d expired demo sessions", len(expired))


__all__ = ["Clock", "DemoSession", "DemoSessionStore", "utcnow"]
