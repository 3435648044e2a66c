# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .entities import SessionWarning


class SessionEventKind(StrEnum):
    CREATED = "created"
    RESUMED = "resumed"
    EXTENDED = "extended"
    WARNING_SHOWN = "warning_shown"
    WARNING_HIDDEN = "warning_hidden"
    EXPIRED = "expired"
    LOGGED_OUT = "logged_out"


@dataclass(slots=True, frozen=True)
class SessionEvent:
    kind: SessionEventKind
    session_id: str | None = None
    warning: SessionWarning | None = None


class ActivitySignal(StrEnum):
    """User interaction kinds that count as session activity."""

    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    KEY_PRESS = "key_press"
    SCROLL = "scroll"
    TOUCH_START = "touch_start"
    CLICK = "click"
    VISIBILITY_REGAINED = "visibility_regained"
