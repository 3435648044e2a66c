# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from syntrio.domain.conversations.entities import ConversationStatus
from syntrio.domain.sessions.events import ActivitySignal, SessionEvent


class KeyValueStore(Protocol):
    """String key-value storage shaped like browser local storage."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


Clock = Callable[[], float]


class ActivitySource(Protocol):
    def add_listener(self, listener: Callable[[ActivitySignal], None]) -> None: ...
    def remove_listener(self, listener: Callable[[ActivitySignal], None]) -> None: ...


class EventPublisher(Protocol):
    def publish(self, event: SessionEvent) -> None: ...


class ConversationStatusSource(Protocol):
    async def get_conversation_status(self, conversation_id: str) -> ConversationStatus | None: ...
