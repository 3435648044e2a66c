# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from syntrio.domain.translations import get_language_by_code
from syntrio.shared.errors.validation_types import ValidationErrorType

MAX_TEXT_LENGTH = 1000


class TranslationPayloadDTO(BaseModel):
    text: str
    target_language: str
    source_language: str | None = None

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, value: Any) -> str:
        text = "" if value is None else str(value)
        if not text.strip():
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Text content is required for translation",
                {},
            )
        if len(text) > MAX_TEXT_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.TOO_LONG,
                "Text content exceeds maximum length of 1000 characters",
                {"max_length": MAX_TEXT_LENGTH},
            )
        return text

    @field_validator("target_language", mode="before")
    @classmethod
    def validate_target_language(cls, value: Any) -> str:
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Target language is required",
                {},
            )
        if get_language_by_code(str(value)) is None:
            raise PydanticCustomError(
                ValidationErrorType.LANGUAGE_UNSUPPORTED,
                "Unsupported target language",
                {"language": str(value)},
            )
        return str(value)

    @field_validator("source_language", mode="before")
    @classmethod
    def validate_source_language(cls, value: Any) -> str | None:
        if not value:
            return None
        if get_language_by_code(str(value)) is None:
            raise PydanticCustomError(
                ValidationErrorType.LANGUAGE_UNSUPPORTED,
                "Unsupported source language",
                {"language": str(value)},
            )
        return str(value)
