# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .context import (
    DEFAULT_CONVERSATION_NAME,
    DEFAULT_GREETING,
    default_conversation_name,
    format_conversational_context,
    format_duration,
    generate_context_aware_greeting,
)
from .entities import (
    ConversationProperties,
    ConversationRequest,
    ConversationResult,
    ConversationStatus,
    ConversationStatusKind,
    ConversationUsage,
)

__all__ = [
    "DEFAULT_CONVERSATION_NAME",
    "DEFAULT_GREETING",
    "ConversationProperties",
    "ConversationRequest",
    "ConversationResult",
    "ConversationStatus",
    "ConversationStatusKind",
    "ConversationUsage",
    "default_conversation_name",
    "format_conversational_context",
    "format_duration",
    "generate_context_aware_greeting",
]
