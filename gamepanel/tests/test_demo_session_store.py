from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

pytestmark = pytest.mark.unit

from gamepanel.core.demo.constants import DEMO_USERNAME
from gamepanel.core.demo.session_store import DemoSessionStore


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


def test_create_records_demo_session(clock):
    store = DemoSessionStore(clock=clock)
    session = store.create()

    assert session.username == DEMO_USERNAME
    assert session.session_id.startswith("demo_")
    assert session.created_at == clock.now
    assert session.expires_at == clock.now + timedelta(hours=24)
    assert store.count_active() == 1


def test_session_ids_are_unique(clock):
    store = DemoSessionStore(clock=clock)
    ids = {store.create().session_id for _ in range(5)}
    assert len(ids) == 5
    assert store.count_active() == 5


def test_session_expires_after_ttl(clock):
    store = DemoSessionStore(clock=clock)
    store.create()

    clock.advance(hours=24, seconds=-1)
    assert store.count_active() == 1

    clock.advance(seconds=2)
    assert store.count_active() == 0


def test_session_is_inactive_exactly_at_expiry(clock):
    store = DemoSessionStore(clock=clock)
    session = store.create()
    assert session.is_active(session.expires_at) is False


def test_only_expired_sessions_are_evicted(clock):
    store = DemoSessionStore(clock=clock)
    store.create()
    clock.advance(hours=12)
    store.create()
    clock.advance(hours=13)
    assert store.count_active() == 1


def test_clear_removes_everything(clock):
    store = DemoSessionStore(clock=clock)
    store.create()
    store.create()
    assert store.clear() == 2
    assert store.count_active() == 0


def test_create_evicts_expired_sessions(clock):
    store = DemoSessionStore(clock=clock)
    store.create()
    store.create()
    clock.advance(hours=25)

    store.create()

    assert store.clear() == 1
