# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import UserProfile, UserRecord


class UserRepository(Protocol):
    def list_all(self) -> Sequence[UserRecord]: ...
    def find_by_email(self, email: str) -> UserRecord | None: ...
    def find_by_id(self, user_id: str) -> UserRecord | None: ...
    def add(self, user: UserRecord) -> UserRecord: ...
    def update(self, user: UserRecord) -> UserRecord: ...
    def clear(self) -> None: ...


class CurrentUserStore(Protocol):
    def set(self, profile: UserProfile) -> None: ...
    def get(self) -> UserProfile | None: ...
    def clear(self) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
