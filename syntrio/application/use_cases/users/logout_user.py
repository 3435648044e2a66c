"""Use-case for ending the local session."""

from __future__ import annotations

from syntrio.application.services.profile_store import ProfileStore
from syntrio.application.services.session_lifecycle import SessionLifecycleManager


class LogoutUserUseCase:
    def __init__(
        self,
        *,
        profiles: ProfileStore,
        sessions: SessionLifecycleManager,
    ) -> None:
        self._profiles = profiles
        self._sessions = sessions

    def execute(self) -> None:
        self._sessions.clear_session()
        self._profiles.clear_current_user()
