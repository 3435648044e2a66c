# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    DEFAULT_AVATAR,
    DEFAULT_LANGUAGE,
    Session,
    SessionInfo,
    SessionState,
    SessionWarning,
    WorkInProgress,
)
from .events import ActivitySignal, SessionEvent, SessionEventKind
from .repositories import SessionRepository, WorkBackupRepository

__all__ = [
    "ActivitySignal",
    "DEFAULT_AVATAR",
    "DEFAULT_LANGUAGE",
    "Session",
    "SessionEvent",
    "SessionEventKind",
    "SessionInfo",
    "SessionRepository",
    "SessionState",
    "SessionWarning",
    "WorkBackupRepository",
    "WorkInProgress",
]
