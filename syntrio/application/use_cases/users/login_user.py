# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from syntrio.application.services.profile_store import ProfileStore
from syntrio.application.services.session_lifecycle import SessionLifecycleManager
from syntrio.domain.sessions import Session
from syntrio.domain.users import UserProfile


class LoginUserUseCase:
    def __init__(
        self,
        *,
        profiles: ProfileStore,
        sessions: SessionLifecycleManager,
    ) -> None:
        self._profiles = profiles
        self._sessions = sessions

    def execute(self, email: str, password: str) -> tuple[UserProfile, Session]:
        profile = self._profiles.authenticate(email, password)
        self._profiles.set_current_user(profile)
        session = self._sessions.create_session(profile.id, profile.email, profile.name)
        return profile, session
