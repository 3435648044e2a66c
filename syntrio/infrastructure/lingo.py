# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Translation provider client."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from syntrio.application.dto.translations import TranslationPayloadDTO
from syntrio.domain.translations import (
    SUPPORTED_LANGUAGES,
    LanguageOption,
    TranslationRequest,
    TranslationResult,
    get_language_by_code,
)
from syntrio.infrastructure.http import ProviderHttpClient, ProviderMessages
from syntrio.shared.errors import (
    AppError,
    ProtocolError,
    ValidationError,
    first_error_message,
    format_pydantic_errors,
)
from syntrio.shared.logging import logger

LINGO_MESSAGES = ProviderMessages(
    display_name="Lingo.dev",
    unavailable="Lingo.dev service is temporarily unavailable. Please try again later.",
    timeout="Translation request timed out. Please try again.",
    network="Unable to connect to translation service. Please check your internet connection.",
    failure="Translation request failed",
    invalid_response="Invalid response format from translation service",
)


class LingoTranslationClient(ProviderHttpClient):
    provider = "lingo"
    messages = LINGO_MESSAGES

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @staticmethod
    def get_supported_languages() -> tuple[LanguageOption, ...]:
        return SUPPORTED_LANGUAGES

    @staticmethod
    def get_language_by_code(code: str) -> LanguageOption | None:
        return get_language_by_code(code)

    async def translate_text(self, request: TranslationRequest) -> TranslationResult:
        try:
            payload = TranslationPayloadDTO(
                text=request.text,
                target_language=request.target_language,
                source_language=request.source_language,
            )
        except PydanticValidationError as exc:
            message = first_error_message(exc)
            logger.info(f"lingo: request rejected reason={message}")
            return TranslationResult(
                success=False,
                failure=ValidationError(message, context=format_pydantic_errors(exc)),
            )

        if payload.source_language and payload.source_language == payload.target_language:
            logger.debug("lingo: source equals target, returning original text")
            return TranslationResult(
                success=True,
                translated_text=payload.text,
                detected_language=payload.source_language,
            )

        body: dict[str, Any] = {"text": payload.text, "target_language": payload.target_language}
        if payload.source_language:
            body["source_language"] = payload.source_language

        logger.info(
            f"lingo: translating length={len(payload.text)} "
            f"target={payload.target_language} source={payload.source_language}"
        )

        try:
            response = await self._request("POST", "/translate", payload=body)
            data = self._json_body(response)
            translated = data.get("translated_text")
            if not translated:
                raise ProtocolError(self.messages.invalid_response)
        except AppError as exc:
            logger.warning(f"lingo: translation failed code={exc.code} message={exc.message}")
            return TranslationResult(success=False, failure=exc)

        logger.info(
            f"lingo: translation done length={len(translated)} detected={data.get('detected_language')}"
        )
        return TranslationResult(
            success=True,
            translated_text=str(translated),
            detected_language=data.get("detected_language"),
        )


__all__ = ["LINGO_MESSAGES", "LingoTranslationClient"]
