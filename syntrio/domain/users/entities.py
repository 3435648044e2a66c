# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(slots=True, frozen=True)
class UserProfile:
    """Public view of a user; never carries the password hash."""

    id: str
    email: str
    name: str
    created_at: str
    updated_at: str


@dataclass(slots=True, frozen=True)
class UserRecord:

    id: str
    email: str
    name: str
    password_hash: str
    created_at: str
    updated_at: str

    def matches_email(self, email: str) -> bool:
        return self.email.lower() == email.strip().lower()

    def renamed(self, name: str, updated_at: str) -> UserRecord:
        return replace(self, name=name, updated_at=updated_at)

    def to_profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(slots=True, frozen=True)
class UserStats:
    total_users: int
    latest_user: str | None = None
