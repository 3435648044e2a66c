# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from syntrio.application.services.profile_store import ProfileStore
from syntrio.domain.users import UserProfile
from syntrio.shared.errors import AuthError


class UpdateProfileUseCase:
    def __init__(self, *, profiles: ProfileStore) -> None:
        self._profiles = profiles

    def execute(self, name: str) -> UserProfile:
        current = self._profiles.get_current_user()
        if current is None:
            raise AuthError("You must be signed in to update your profile", code="not_authenticated")
        return self._profiles.update_user(current.id, name=name)
