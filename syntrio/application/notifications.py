# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from syntrio.shared.errors import AppError, AuthError, QuotaExhaustedError

DEFAULT_DISMISS_AFTER = 8.0


@dataclass(slots=True, frozen=True)
class Banner:
    message: str
    code: str
    persistent: bool
    dismiss_after: float | None = None


def banner_for(failure: AppError, *, dismiss_after: float = DEFAULT_DISMISS_AFTER) -> Banner:
    """Auth and quota problems need user action; everything else clears itself."""

    if isinstance(failure, (AuthError, QuotaExhaustedError)):
        return Banner(message=failure.message, code=failure.code, persistent=True)
    return Banner(
        message=failure.message,
        code=failure.code,
        persistent=False,
        dismiss_after=dismiss_after,
    )


__all__ = ["Banner", "banner_for"]
