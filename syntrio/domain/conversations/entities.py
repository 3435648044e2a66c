# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Avatar conversation entities."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

from syntrio.domain.results import OperationResult


class ConversationStatusKind(StrEnum):
    CREATING = "creating"
    READY = "ready"
    ACTIVE = "active"
    ENDED = "ended"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ConversationStatusKind.ENDED, ConversationStatusKind.FAILED)


@dataclass(slots=True, frozen=True)
class ConversationProperties:
    """Call limits sent with every conversation; durations in seconds."""

    max_call_duration: int = 1800
    participant_left_timeout: int = 60
    participant_absent_timeout: int = 300
    language: str = "english"

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class ConversationRequest:
    replica_id: str
    conversation_name: str
    custom_greeting: str
    conversational_context: str | None = None
    properties: ConversationProperties = field(default_factory=ConversationProperties)


@dataclass(slots=True, frozen=True)
class ConversationResult(OperationResult):
    conversation_id: str | None = None
    conversation_url: str | None = None
    status: ConversationStatusKind | None = None
    expires_at: str | None = None


@dataclass(slots=True, frozen=True)
class ConversationStatus:
    conversation_id: str
    status: ConversationStatusKind
    conversation_url: str | None = None
    participants: int = 0
    duration: int = 0
    error: str | None = None
    expires_at: str | None = None

    @property
    def keeps_polling(self) -> bool:
        return not self.status.is_terminal


@dataclass(slots=True, frozen=True)
class ConversationUsage:
    total_minutes_used: int = 0
    total_minutes_available: int = 250
    remaining_minutes: int = 250
    current_month_usage: int = 0
