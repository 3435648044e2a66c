# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session lifecycle and work-in-progress entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum

DEFAULT_LANGUAGE = "en-US"
DEFAULT_AVATAR = "r4dcf31b60e1"
MIN_TOPIC_LENGTH = 10


class SessionState(StrEnum):
    NO_SESSION = "no_session"
    ACTIVE = "active"
    WARNING = "warning"
    EXPIRED = "expired"
    LOGGED_OUT = "logged_out"


@dataclass(slots=True, frozen=True)
class Session:
    """Single authenticated session slot. Timestamps are epoch seconds."""

    user_id: str
    email: str
    name: str
    session_id: str
    login_time: float
    last_activity: float
    expires_at: float
    device_info: str

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at

    def remaining(self, now: float) -> float:
        return max(0.0, self.expires_at - now)

    def touched(self, now: float) -> Session:
        return replace(self, last_activity=now)

    def extended(self, now: float, duration: float) -> Session:
        return replace(self, last_activity=now, expires_at=now + duration)


def _noop() -> None:
    return None


@dataclass(slots=True, frozen=True)
class SessionWarning:
    visible: bool
    time_remaining: float
    extend: Callable[[], None] = field(default=_noop, compare=False)
    force_logout: Callable[[], None] = field(default=_noop, compare=False)

    @classmethod
    def hidden(cls) -> SessionWarning:
        return cls(visible=False, time_remaining=0.0)


@dataclass(slots=True, frozen=True)
class SessionInfo:
    time_remaining: str
    device_info: str
    login_time: str


@dataclass(slots=True, frozen=True)
class WorkInProgress:
    """Point-in-time capture of wizard input kept to survive forced logout."""

    topic_text: str = ""
    selected_language: str = DEFAULT_LANGUAGE
    translated_text: str = ""
    bypass_translation: bool = False
    selected_avatar: str | None = DEFAULT_AVATAR
    wizard_step: int = 1
    captured_at: float | None = None

    def is_meaningful(self) -> bool:
        return bool(
            self.topic_text.strip()
            or self.translated_text.strip()
            or self.selected_language != DEFAULT_LANGUAGE
        )

    def can_proceed(self, step: int) -> bool:
        if step == 1:
            return len(self.topic_text.strip()) >= MIN_TOPIC_LENGTH
        if step == 2:
            return (
                self.bypass_translation
                or len(self.translated_text.strip()) > 0
                or self.selected_language == DEFAULT_LANGUAGE
            )
        if step == 3:
            return bool(self.selected_avatar)
        return True

    def stamped(self, captured_at: float) -> WorkInProgress:
        return replace(self, captured_at=captured_at)

    def is_fresh(self, now: float, window: float) -> bool:
        return self.captured_at is not None and now - self.captured_at < window
