# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime

from syntrio.application.interfaces import Clock

HOUR = 60 * 60


@dataclass(slots=True, frozen=True)
class UsageStats:
    request_count: int
    remaining_requests: int
    reset_time: datetime


class RollingHourlyRateLimiter:
    """Fixed quota per window; the counter resets once a full window has passed."""

    def __init__(self, limit: int, window_seconds: float = HOUR, *, clock: Clock = time.time) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._count = 0
        self._last_reset = clock()

    @property
    def limit(self) -> int:
        return self._limit

    def _roll(self, now: float) -> None:
        if now - self._last_reset >= self._window:
            self._count = 0
            self._last_reset = now

    def allow(self) -> bool:
        self._roll(self._clock())
        if self._count >= self._limit:
            return False
        self._count += 1
        return True

    def get_usage_stats(self) -> UsageStats:
        self._roll(self._clock())
        return UsageStats(
            request_count=self._count,
            remaining_requests=max(0, self._limit - self._count),
            reset_time=datetime.fromtimestamp(self._last_reset + self._window, UTC),
        )

    def reset(self) -> None:
        self._count = 0
        self._last_reset = self._clock()


__all__ = ["RollingHourlyRateLimiter", "UsageStats"]
