# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from syntrio.shared.errors import AppError


@dataclass(slots=True, frozen=True)
class OperationResult:
    """Outcome of a provider call; failures carry the typed error instead of raising."""

    success: bool
    failure: AppError | None = None

    @property
    def error(self) -> str | None:
        return self.failure.message if self.failure else None
