# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from syntrio.application.interfaces import TimerHandle, TimerScheduler
from syntrio.application.services.session_lifecycle import SessionLifecycleManager
from syntrio.domain.sessions import SessionState, WorkInProgress
from syntrio.shared.logging import logger

SnapshotProvider = Callable[[], WorkInProgress | None]


class WorkInProgressAutosaver:
    """Periodically backs up wizard input while a session is open."""

    def __init__(
        self,
        *,
        sessions: SessionLifecycleManager,
        scheduler: TimerScheduler,
        interval: float,
        provider: SnapshotProvider | None = None,
    ) -> None:
        self._sessions = sessions
        self._scheduler = scheduler
        self._interval = interval
        self._provider = provider
        self._timer: TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def set_provider(self, provider: SnapshotProvider | None) -> None:
        self._provider = provider

    def start(self) -> None:
        if self._timer is None:
            self._timer = self._scheduler.call_later(self._interval, self._tick)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def save_now(self) -> bool:
        if self._provider is None:
            return False
        if self._sessions.state not in (SessionState.ACTIVE, SessionState.WARNING):
            return False

        snapshot = self._provider()
        if snapshot is None or not snapshot.is_meaningful():
            return False

        self._sessions.backup_work_in_progress(snapshot)
        self._sessions.stage_work_in_progress(snapshot)
        return True

    def _tick(self) -> None:
        self._timer = None
        try:
            if self.save_now():
                logger.debug("autosave: snapshot stored")
        finally:
            self.start()


__all__ = ["SnapshotProvider", "WorkInProgressAutosaver"]
