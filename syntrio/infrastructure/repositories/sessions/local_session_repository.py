# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import TypeAdapter

from syntrio.application.interfaces import KeyValueStore
from syntrio.domain.sessions.entities import Session, WorkInProgress
from syntrio.domain.sessions.repositories import SessionRepository, WorkBackupRepository
from syntrio.infrastructure.repositories.records import (
    SESSION_KEY,
    WORK_BACKUP_KEY,
    SessionModel,
    WorkInProgressModel,
    load_record,
    save_record,
)

_SESSION = TypeAdapter(SessionModel)
_BACKUP = TypeAdapter(WorkInProgressModel)


class LocalSessionRepository(SessionRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> Session | None:
        row = load_record(self._store, SESSION_KEY, _SESSION)
        return row.to_entity() if row else None

    def save(self, session: Session) -> None:
        save_record(self._store, SESSION_KEY, _SESSION, SessionModel.from_entity(session))

    def delete(self) -> None:
        self._store.remove_item(SESSION_KEY)


class LocalWorkBackupRepository(WorkBackupRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> WorkInProgress | None:
        row = load_record(self._store, WORK_BACKUP_KEY, _BACKUP)
        return row.to_entity() if row else None

    def save(self, snapshot: WorkInProgress) -> None:
        save_record(self._store, WORK_BACKUP_KEY, _BACKUP, WorkInProgressModel.from_entity(snapshot))

    def delete(self) -> None:
        self._store.remove_item(WORK_BACKUP_KEY)
