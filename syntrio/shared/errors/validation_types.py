# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    EMAIL_INVALID = "email_invalid"
    LANGUAGE_UNSUPPORTED = "language_unsupported"


__all__ = ["ValidationErrorType"]
