# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    SUPPORTED_LANGUAGES,
    LanguageOption,
    TranslationRequest,
    TranslationResult,
    get_language_by_code,
)

__all__ = [
    "SUPPORTED_LANGUAGES",
    "LanguageOption",
    "TranslationRequest",
    "TranslationResult",
    "get_language_by_code",
]
