# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stored JSON shapes for the local key-value records."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from syntrio.application.interfaces import KeyValueStore
from syntrio.domain.sessions import DEFAULT_AVATAR, DEFAULT_LANGUAGE, Session, WorkInProgress
from syntrio.domain.users import UserProfile, UserRecord
from syntrio.infrastructure.storage import read_json, write_json
from syntrio.shared.logging import logger

USERS_KEY = "syntrio_users"
CURRENT_USER_KEY = "syntrio_current_user"
SESSION_KEY = "syntrio_session"
WORK_BACKUP_KEY = "syntrio_work_backup"

T = TypeVar("T")


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UserRecordModel(_Record):
    id: str
    email: str
    name: str
    password_hash: str
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, user: UserRecord) -> UserRecordModel:
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_entity(self) -> UserRecord:
        return UserRecord(**self.model_dump())


class UserProfileModel(_Record):
    id: str
    email: str
    name: str
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, profile: UserProfile) -> UserProfileModel:
        return cls(
            id=profile.id,
            email=profile.email,
            name=profile.name,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    def to_entity(self) -> UserProfile:
        return UserProfile(**self.model_dump())


class SessionModel(_Record):
    user_id: str
    email: str
    name: str
    session_id: str
    login_time: float
    last_activity: float
    expires_at: float
    device_info: str = ""

    @classmethod
    def from_entity(cls, session: Session) -> SessionModel:
        return cls(
            user_id=session.user_id,
            email=session.email,
            name=session.name,
            session_id=session.session_id,
            login_time=session.login_time,
            last_activity=session.last_activity,
            expires_at=session.expires_at,
            device_info=session.device_info,
        )

    def to_entity(self) -> Session:
        return Session(**self.model_dump())


class WorkInProgressModel(_Record):
    topic_text: str = ""
    selected_language: str = DEFAULT_LANGUAGE
    translated_text: str = ""
    bypass_translation: bool = False
    selected_avatar: str | None = DEFAULT_AVATAR
    wizard_step: int = 1
    captured_at: float | None = None

    @classmethod
    def from_entity(cls, snapshot: WorkInProgress) -> WorkInProgressModel:
        return cls(
            topic_text=snapshot.topic_text,
            selected_language=snapshot.selected_language,
            translated_text=snapshot.translated_text,
            bypass_translation=snapshot.bypass_translation,
            selected_avatar=snapshot.selected_avatar,
            wizard_step=snapshot.wizard_step,
            captured_at=snapshot.captured_at,
        )

    def to_entity(self) -> WorkInProgress:
        return WorkInProgress(**self.model_dump())


def load_record(store: KeyValueStore, key: str, adapter: TypeAdapter[T]) -> T | None:
    """Decode and validate a stored record; anything unreadable is dropped."""

    data = read_json(store, key)
    if data is None:
        return None
    try:
        return adapter.validate_python(data)
    except PydanticValidationError as exc:
        logger.warning(f"storage: invalid record key={key} errors={exc.error_count()}, clearing")
        store.remove_item(key)
        return None


def save_record(store: KeyValueStore, key: str, adapter: TypeAdapter[T], value: T) -> None:
    write_json(store, key, adapter.dump_python(value, mode="json"))


__all__ = [
    "CURRENT_USER_KEY",
    "SESSION_KEY",
    "USERS_KEY",
    "WORK_BACKUP_KEY",
    "SessionModel",
    "UserProfileModel",
    "UserRecordModel",
    "WorkInProgressModel",
    "load_record",
    "save_record",
]
