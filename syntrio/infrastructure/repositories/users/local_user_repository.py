# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from pydantic import TypeAdapter

from syntrio.application.interfaces import KeyValueStore
from syntrio.domain.users.entities import UserProfile, UserRecord
from syntrio.domain.users.repositories import CurrentUserStore, UserRepository
from syntrio.infrastructure.repositories.records import (
    CURRENT_USER_KEY,
    USERS_KEY,
    UserProfileModel,
    UserRecordModel,
    load_record,
    save_record,
)
from syntrio.shared.errors import UserNotFoundError

_USERS = TypeAdapter(list[UserRecordModel])
_PROFILE = TypeAdapter(UserProfileModel)


class LocalUserRepository(UserRepository):
    """User table kept as one JSON array; last writer wins."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def _load(self) -> list[UserRecordModel]:
        return load_record(self._store, USERS_KEY, _USERS) or []

    def _save(self, rows: list[UserRecordModel]) -> None:
        save_record(self._store, USERS_KEY, _USERS, rows)

    def list_all(self) -> Sequence[UserRecord]:
        return [row.to_entity() for row in self._load()]

    def find_by_email(self, email: str) -> UserRecord | None:
        needle = email.strip().lower()
        for row in self._load():
            if row.email.lower() == needle:
                return row.to_entity()
        return None

    def find_by_id(self, user_id: str) -> UserRecord | None:
        for row in self._load():
            if row.id == user_id:
                return row.to_entity()
        return None

    def add(self, user: UserRecord) -> UserRecord:
        rows = self._load()
        rows.append(UserRecordModel.from_entity(user))
        self._save(rows)
        return user

    def update(self, user: UserRecord) -> UserRecord:
        rows = self._load()
        for index, row in enumerate(rows):
            if row.id == user.id:
                rows[index] = UserRecordModel.from_entity(user)
                self._save(rows)
                return user
        raise UserNotFoundError(context={"user_id": user.id})

    def clear(self) -> None:
        self._store.remove_item(USERS_KEY)


class LocalCurrentUserStore(CurrentUserStore):
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def set(self, profile: UserProfile) -> None:
        save_record(self._store, CURRENT_USER_KEY, _PROFILE, UserProfileModel.from_entity(profile))

    def get(self) -> UserProfile | None:
        row = load_record(self._store, CURRENT_USER_KEY, _PROFILE)
        return row.to_entity() if row else None

    def clear(self) -> None:
        self._store.remove_item(CURRENT_USER_KEY)
