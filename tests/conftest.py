"""Shared fixtures for the session engine tests."""

from datetime import datetime, timedelta, timezone
from typing import Callable, List
from uuid import UUID

import pytest

from chat_session_engine.domain.models import ModelOption
from chat_session_engine.repositories.memory import InMemoryMessageStore
from chat_session_engine.services.scheduler import DelayScheduler
from chat_session_engine.services.session import SessionController
from chat_session_engine.services.settings import SettingsStore


class ManualHandle:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimer:
    """Timer driven by ``advance()`` instead of an event loop."""

    def __init__(self):
        self.now = 0.0
        self.handles: List[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0
        due = [h for h in self.handles if h.due <= self.now + 1e-9 and not h.cancelled]
        self.handles = [h for h in self.handles if h not in due]
        for handle in sorted(due, key=lambda h: h.due):
            handle.callback()

    @property
    def active(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]


def sequential_ids() -> Callable[[], UUID]:
    counter = iter(range(1, 10_000))
    return lambda: UUID(int=next(counter))


def fixed_clock() -> Callable[[], datetime]:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def store() -> InMemoryMessageStore:
    return InMemoryMessageStore(id_factory=sequential_ids(), clock=fixed_clock())


@pytest.fixture
def scheduler(timer) -> DelayScheduler:
    return DelayScheduler(timer)


@pytest.fixture
def nova_catalog():
    return (ModelOption(id="nova-3", label="Nova 3", description="Everyday assistant"),)


@pytest.fixture
def session(store, timer) -> SessionController:
    """Session on the default catalog driven by the manual timer."""
    return SessionController(store=store, timer=timer)


@pytest.fixture
def nova_session(store, timer, nova_catalog) -> SessionController:
    return SessionController(store=store, settings=SettingsStore(nova_catalog), timer=timer)
