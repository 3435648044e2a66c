# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from syntrio.domain.results import OperationResult


@dataclass(slots=True, frozen=True)
class LanguageOption:
    code: str
    name: str
    flag: str
    native_name: str


SUPPORTED_LANGUAGES: tuple[LanguageOption, ...] = (
    LanguageOption("en", "English", "🇺🇸", "English"),
    LanguageOption("es", "Spanish", "🇪🇸", "Español"),
    LanguageOption("fr", "French", "🇫🇷", "Français"),
    LanguageOption("de", "German", "🇩🇪", "Deutsch"),
    LanguageOption("it", "Italian", "🇮🇹", "Italiano"),
    LanguageOption("pt", "Portuguese", "🇧🇷", "Português"),
    LanguageOption("ja", "Japanese", "🇯🇵", "日本語"),
    LanguageOption("ko", "Korean", "🇰🇷", "한국어"),
    LanguageOption("zh", "Chinese", "🇨🇳", "中文"),
    LanguageOption("ar", "Arabic", "🇸🇦", "العربية"),
)


def get_language_by_code(code: str | None) -> LanguageOption | None:
    return next((lang for lang in SUPPORTED_LANGUAGES if lang.code == code), None)


@dataclass(slots=True, frozen=True)
class TranslationRequest:
    text: str
    target_language: str
    source_language: str | None = None


@dataclass(slots=True, frozen=True)
class TranslationResult(OperationResult):
    translated_text: str | None = None
    detected_language: str | None = None
