# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Event-loop backed one-shot timers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from syntrio.application.interfaces import TimerScheduler


class AsyncioTimerScheduler(TimerScheduler):
    """Schedules callbacks on the running loop, resolved at call time."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay), callback)


__all__ = ["AsyncioTimerScheduler"]
