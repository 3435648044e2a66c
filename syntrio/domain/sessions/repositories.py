# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Session, WorkInProgress


class SessionRepository(Protocol):
    def load(self) -> Session | None: ...
    def save(self, session: Session) -> None: ...
    def delete(self) -> None: ...


class WorkBackupRepository(Protocol):
    def load(self) -> WorkInProgress | None: ...
    def save(self, snapshot: WorkInProgress) -> None: ...
    def delete(self) -> None: ...
