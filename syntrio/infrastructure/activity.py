# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Process-wide user interaction signals."""

from __future__ import annotations

from collections.abc import Callable

from syntrio.domain.sessions.events import ActivitySignal
from syntrio.shared.logging import logger

ActivityListener = Callable[[ActivitySignal], None]


class ActivityMonitor:
    """Fans interaction signals out to registered listeners.

    The host (UI shell, terminal front end, tests) calls :meth:`emit` for every
    interaction it observes. Listeners must be removed with the same callable
    object that was added.
    """

    def __init__(self) -> None:
        self._listeners: list[ActivityListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: ActivityListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ActivityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, signal: ActivitySignal) -> None:
        for listener in list(self._listeners):
            try:
                listener(signal)
            except Exception:
                logger.exception(f"activity: listener failed signal={signal}")


__all__ = ["ActivityListener", "ActivityMonitor", "ActivitySignal"]
