"""Periodic demo reset: clears demo sessions and republishes the next reset time."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, Optional

from gamepanel.core.demo.session_store import Clock, DemoSessionStore, utcnow

logger = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_ARMED = "armed"


@dataclass(frozen=True)
class ResetState:
    last_reset: Optional[datetime]
    next_reset: Optional[datetime]
    reset_interval_hours: float


class _RepeatingTimer:
    """Daemon thread firing ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="demo-reset-timer", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self, timeout: Optional[float] = 5.0) -> None:
        self._stopped.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("Demo reset timer callback failed")


class ResetScheduler:
    """Two states: ``idle`` until :meth:`initialize`, then ``armed`` until :meth:`shutdown`."""

    def __init__(self, store: DemoSessionStore, interval_hours: float, clock: Optional[Clock] = None):
        if interval_hours <= 0:
            raise ValueError("reset_interval_must_be_positive")
        self.store = store
        self.interval_hours = float(interval_hours)
        self._clock = clock or utcnow
        self._lock = threading.Lock()
        self._state = ResetState(last_reset=None, next_reset=None, reset_interval_hours=self.interval_hours)
        self._timer: Optional[_RepeatingTimer] = None
        self.status = STATE_IDLE

    @property
    def interval(self) -> timedelta:
        return timedelta(hours=self.interval_hours)

    def initialize(self, start_timer: bool = True) -> ResetState:
        """Record the initial reset window and arm the timer (once)."""
        with self._lock:
            if self.status == STATE_ARMED:
                logger.warning("Demo reset scheduler already armed; ignoring initialize()")
                return replace(self._state)
            now = self._clock()
            self._state = ResetState(
                last_reset=now,
                next_reset=now + self.interval,
                reset_interval_hours=self.interval_hours,
            )
            if start_timer:
                self._timer = _RepeatingTimer(self.interval.total_seconds(), self.perform_reset)
                self._timer.start()
            self.status = STATE_ARMED
            state = replace(self._state)

        logger.info(
            "Demo mode enabled with %sh reset interval; next reset at %s",
            self.interval_hours,
            state.next_reset.isoformat(),
        )
        return state

    def perform_reset(self) -> ResetState:
        """Clear every demo session and move the reset window forward."""
        removed = self.store.clear()
        with self._lock:
            now = self._clock()
            self._state = ResetState(
                last_reset=now,
                next_reset=now + self.interval,
                reset_interval_hours=self.interval_hours,
            )
            state = replace(self._state)
        logger.info("Demo reset complete (%d sessions cleared); next reset at %s", removed, state.next_reset.isoformat())
        return state

    def state(self) -> ResetState:
        with self._lock:
            return replace(self._state)

    def shutdown(self) -> None:
        """Cancel the timer, if any, and return to idle."""
        with self._lock:
            timer, self._timer = self._timer, None
            self.status = STATE_IDLE
        if timer:
            timer.cancel()
            logger.info("Demo reset timer cancelled")

    @property
    def timer_running(self) -> bool:
        return bool(self._timer and self._timer.alive)


__all__ = ["ResetScheduler", "ResetState", "STATE_ARMED", "STATE_IDLE"]
