# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

SENSITIVE_PATTERNS = [
    # API keys and secrets
    (r"(api[_-]?key\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-]{12,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(x-api-key\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-]{12,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"\b(tavus_)[a-zA-Z0-9]{8,}\b", r"\1***REDACTED***"),
    (r"\b(api_)[a-zA-Z0-9]{16,}\b", r"\1***REDACTED***"),

    # Tokens
    (r"(bearer\s+)([a-zA-Z0-9_\-\.]{12,})", r"\1***REDACTED***", re.IGNORECASE),
    (r"(authorization\s*:\s*['\"]?)([^'\"]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Passwords
    (r"(password\s*[:=]\s*['\"]?)([^'\"\s]{1,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(password_hash\s*[:=]\s*['\"]?)([^'\"\s]{1,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Email addresses (partial masking)
    (r"([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", r"***@\2"),
]


def sanitize_message(message: str) -> str:
    sanitized = message

    for pattern_tuple in SENSITIVE_PATTERNS:
        if len(pattern_tuple) == 2:
            pattern, replacement = pattern_tuple
            flags = 0
        else:
            pattern, replacement, flags = pattern_tuple

        sanitized = re.sub(pattern, replacement, sanitized, flags=flags)

    return sanitized


def sanitize_record(record: dict[str, Any]) -> bool:
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


def mask_api_key(api_key: str | None) -> str:
    if not api_key or len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}{'*' * (len(api_key) - 8)}{api_key[-4:]}"
