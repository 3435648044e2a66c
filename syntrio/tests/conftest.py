from __future__ import annotations

from collections.abc import Callable

import pytest

from syntrio.application.services.profile_store import ProfileStore
from syntrio.application.services.session_lifecycle import SessionLifecycleManager
from syntrio.domain.users.repositories import PasswordHasher
from syntrio.infrastructure.activity import ActivityMonitor
from syntrio.infrastructure.events import SessionEventChannel
from syntrio.infrastructure.repositories.sessions import (
    LocalSessionRepository,
    LocalWorkBackupRepository,
)
from syntrio.infrastructure.repositories.users import LocalCurrentUserStore, LocalUserRepository
from syntrio.infrastructure.storage import InMemoryKeyValueStore
from syntrio.shared.config import SessionConfig

START = 1_700_000_000.0
DAY = 24 * 60 * 60


class ManualClock:
    def __init__(self, start: float = START) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualTimer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Fires due callbacks in time order while moving the shared clock."""

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self.timers: list[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.clock() + max(0.0, delay), callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        target = self.clock() + seconds
        while True:
            self.timers = self.pending
            due = sorted((t for t in self.timers if t.when <= target), key=lambda t: t.when)
            if not due:
                break
            timer = due[0]
            self.clock.now = max(self.clock.now, timer.when)
            timer.fired = True
            timer.callback()
        self.clock.now = target


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def scheduler(clock: ManualClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def events() -> SessionEventChannel:
    return SessionEventChannel()


@pytest.fixture()
def activity() -> ActivityMonitor:
    return ActivityMonitor()


@pytest.fixture()
def session_config() -> SessionConfig:
    return SessionConfig(
        duration=DAY,
        warning_window=5 * 60,
        activity_threshold=30,
        backup_freshness=DAY,
        autosave_interval=30,
    )


@pytest.fixture()
def profile_store(store: InMemoryKeyValueStore, hasher: DeterministicHasher, clock: ManualClock) -> ProfileStore:
    return ProfileStore(
        users=LocalUserRepository(store),
        current_user=LocalCurrentUserStore(store),
        password_hasher=hasher,
        clock=clock,
    )


@pytest.fixture()
def session_manager(
    store: InMemoryKeyValueStore,
    scheduler: ManualScheduler,
    activity: ActivityMonitor,
    events: SessionEventChannel,
    session_config: SessionConfig,
    clock: ManualClock,
) -> SessionLifecycleManager:
    manager = SessionLifecycleManager(
        sessions=LocalSessionRepository(store),
        backups=LocalWorkBackupRepository(store),
        scheduler=scheduler,
        activity=activity,
        events=events,
        config=session_config,
        clock=clock,
        device_info="Linux - en-US - test-agent...",
    )
    manager.start()
    yield manager
    manager.cleanup()
