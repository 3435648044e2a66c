# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Local user profiles and the current-user pointer."""

from __future__ import annotations

import time

from pydantic import ValidationError as PydanticValidationError

from syntrio.application.dto.users import LoginRequestDTO, ProfileUpdateDTO, SignupRequestDTO
from syntrio.application.interfaces import Clock
from syntrio.domain.users import (
    CurrentUserStore,
    PasswordHasher,
    UserProfile,
    UserRecord,
    UserRepository,
    UserStats,
)
from syntrio.shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
    raise_validation_error,
)
from syntrio.shared.ids import generate_id, iso_timestamp
from syntrio.shared.logging import logger


class ProfileStore:
    """Creates, authenticates and updates locally stored users.

    Operations raise ``AppError`` subclasses. Reads of the current-user
    pointer never raise and return ``None`` when the stored value is missing
    or unreadable.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        current_user: CurrentUserStore,
        password_hasher: PasswordHasher,
        clock: Clock = time.time,
    ) -> None:
        self._users = users
        self._current_user = current_user
        self._password_hasher = password_hasher
        self._clock = clock

    def create_user(self, name: str, email: str, password: str) -> UserProfile:
        try:
            payload = SignupRequestDTO(name=name, email=email, password=password)
        except PydanticValidationError as exc:
            raise_validation_error(exc)

        if self.email_exists(payload.email):
            raise DuplicateEmailError()

        now = self._clock()
        stamp = iso_timestamp(now)
        record = UserRecord(
            id=generate_id("user", now),
            email=payload.email,
            name=payload.name,
            password_hash=self._password_hasher.hash(payload.password),
            created_at=stamp,
            updated_at=stamp,
        )
        self._users.add(record)
        logger.info(f"profiles: user created id={record.id}")
        return record.to_profile()

    def authenticate(self, email: str, password: str) -> UserProfile:
        try:
            payload = LoginRequestDTO(email=email, password=password)
        except PydanticValidationError as exc:
            raise_validation_error(exc)

        user = self._users.find_by_email(payload.email)
        if user is None:
            raise UserNotFoundError("No account found with this email address")

        if not self._password_hasher.verify(payload.password, user.password_hash):
            logger.info(f"profiles: invalid password id={user.id}")
            raise InvalidCredentialsError()

        logger.info(f"profiles: authenticated id={user.id}")
        return user.to_profile()

    def update_user(self, user_id: str, *, name: str) -> UserProfile:
        try:
            payload = ProfileUpdateDTO(name=name)
        except PydanticValidationError as exc:
            raise_validation_error(exc)

        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})

        updated = self._users.update(user.renamed(payload.name, iso_timestamp(self._clock())))
        profile = updated.to_profile()

        current = self.get_current_user()
        if current is not None and current.id == user_id:
            self.set_current_user(profile)

        logger.info(f"profiles: user updated id={user_id}")
        return profile

    def email_exists(self, email: str) -> bool:
        return self._users.find_by_email(email) is not None

    def set_current_user(self, profile: UserProfile) -> None:
        self._current_user.set(profile)

    def get_current_user(self) -> UserProfile | None:
        return self._current_user.get()

    def clear_current_user(self) -> None:
        self._current_user.clear()

    def get_user_stats(self) -> UserStats:
        users = self._users.list_all()
        latest = max(users, key=lambda user: user.created_at, default=None)
        return UserStats(total_users=len(users), latest_user=latest.name if latest else None)

    def clear_all_data(self) -> None:
        self._users.clear()
        self._current_user.clear()
        logger.warning("profiles: all user data cleared")


__all__ = ["ProfileStore"]
