# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""In-memory fan-out channel for session lifecycle events."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Callable

from syntrio.domain.sessions.events import SessionEvent
from syntrio.shared.logging import logger

SessionEventListener = Callable[[SessionEvent], None]


class SessionEventChannel:
    """Delivers every published event to each subscriber queue and listener.

    Publishing never blocks: queues are unbounded by default and a full queue
    drops the event for that subscriber only.
    """

    def __init__(self, max_size: int = 0, history_size: int = 100) -> None:
        self._max_size = max_size
        self._queues: list[asyncio.Queue[SessionEvent]] = []
        self._listeners: list[SessionEventListener] = []
        self._history: deque[SessionEvent] = deque(maxlen=history_size)

    @property
    def history(self) -> tuple[SessionEvent, ...]:
        return tuple(self._history)

    def subscribe(self) -> asyncio.Queue[SessionEvent]:
        queue: asyncio.Queue[SessionEvent] = asyncio.Queue(maxsize=self._max_size)
        self._queues.append(queue)
        logger.debug(f"events: subscribed total={len(self._queues)}")
        return queue

    def unsubscribe(self, queue: asyncio.Queue[SessionEvent]) -> None:
        if queue in self._queues:
            self._queues.remove(queue)

    def add_listener(self, listener: SessionEventListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SessionEventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: SessionEvent) -> None:
        self._history.append(event)
        logger.debug(f"events: publish kind={event.kind} session_id={event.session_id}")

        for queue in list(self._queues):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(f"events: subscriber queue full, dropped kind={event.kind}")

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"events: listener failed kind={event.kind}")

    async def stream(self) -> AsyncIterator[SessionEvent]:
        queue = self.subscribe()
        try:
            while True:
                yield await queue.get()
        finally:
            self.unsubscribe(queue)

    def clear_history(self) -> None:
        self._history.clear()


__all__ = ["SessionEventChannel", "SessionEventListener"]
