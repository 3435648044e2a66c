# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from prometheus_client import Counter, Gauge, Histogram

from syntrio.domain.sessions.events import SessionEvent, SessionEventKind

OUTBOUND_LATENCY = Histogram(
    "syntrio_outbound_latency_seconds",
    "Provider request latency",
    labelnames=("provider",),
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)
OUTBOUND_COUNTER = Counter(
    "syntrio_outbound_requests_total",
    "Number of provider requests",
    labelnames=("provider", "outcome"),
)
RETRY_COUNTER = Counter(
    "syntrio_outbound_retries_total",
    "Number of provider request retries",
    labelnames=("provider",),
)
ACTIVE_SESSION_GAUGE = Gauge("syntrio_active_sessions", "Open local sessions")

_enabled = True


def configure_metrics(enabled: bool) -> None:
    global _enabled
    _enabled = enabled


def metrics_enabled() -> bool:
    return _enabled


@contextmanager
def track_latency(provider: str, outcome_getter: Callable[[], str]) -> Iterator[None]:
    if not _enabled:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        OUTBOUND_LATENCY.labels(provider=provider).observe(duration)
        OUTBOUND_COUNTER.labels(provider=provider, outcome=outcome_getter()).inc()


def record_retry(provider: str) -> None:
    if _enabled:
        RETRY_COUNTER.labels(provider=provider).inc()


def track_session_event(event: SessionEvent) -> None:
    if not _enabled:
        return
    if event.kind in (SessionEventKind.CREATED, SessionEventKind.RESUMED):
        ACTIVE_SESSION_GAUGE.set(1)
    elif event.kind in (SessionEventKind.EXPIRED, SessionEventKind.LOGGED_OUT):
        ACTIVE_SESSION_GAUGE.set(0)


__all__ = [
    "ACTIVE_SESSION_GAUGE",
    "OUTBOUND_COUNTER",
    "OUTBOUND_LATENCY",
    "RETRY_COUNTER",
    "configure_metrics",
    "metrics_enabled",
    "record_retry",
    "track_latency",
    "track_session_event",
]
