# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from syntrio.shared.errors.validation_types import ValidationErrorType

MAX_GREETING_LENGTH = 500
MAX_CONTEXT_LENGTH = 2000


def _require(value: Any, message: str) -> str:
    text = "" if value is None else str(value)
    if not text.strip():
        raise PydanticCustomError(ValidationErrorType.MISSING, message, {})
    return text


class ConversationPayloadDTO(BaseModel):
    """Checks a conversation request; fields are declared in rule order."""

    replica_id: str
    conversation_name: str
    custom_greeting: str
    conversational_context: str | None = None

    @field_validator("replica_id", mode="before")
    @classmethod
    def validate_replica_id(cls, value: Any) -> str:
        return _require(value, "Replica ID is required for conversation creation")

    @field_validator("conversation_name", mode="before")
    @classmethod
    def validate_conversation_name(cls, value: Any) -> str:
        return _require(value, "Conversation name is required")

    @field_validator("custom_greeting", mode="before")
    @classmethod
    def validate_custom_greeting(cls, value: Any) -> str:
        greeting = _require(value, "Custom greeting is required for conversation")
        if len(greeting) > MAX_GREETING_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.TOO_LONG,
                "Custom greeting exceeds maximum length of 500 characters",
                {"max_length": MAX_GREETING_LENGTH},
            )
        return greeting

    @field_validator("conversational_context", mode="before")
    @classmethod
    def validate_conversational_context(cls, value: Any) -> str | None:
        if not value:
            return None
        context = str(value)
        if len(context) > MAX_CONTEXT_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.TOO_LONG,
                "Conversational context exceeds maximum length of 2000 characters",
                {"max_length": MAX_CONTEXT_LENGTH},
            )
        return context
