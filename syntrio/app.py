# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from syntrio.application.notifications import Banner, banner_for
from syntrio.domain.sessions import SessionEvent, SessionEventKind, WorkInProgress
from syntrio.domain.users import UserProfile
from syntrio.infrastructure.container import Container
from syntrio.infrastructure.observability import configure_metrics, track_session_event
from syntrio.shared.config import AppConfig
from syntrio.shared.errors import AppError
from syntrio.shared.logging import logger, setup_logging


class Application:
    """Top-level state holder with an explicit startup and shutdown."""

    def __init__(self, container: Container, *, configure_logging: bool = True) -> None:
        self.container = container
        self._configure_logging = configure_logging
        self._user: UserProfile | None = None
        self._started = False

    @property
    def current_user(self) -> UserProfile | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    async def startup(self) -> None:
        if self._started:
            return

        config = self.container.config
        if self._configure_logging:
            setup_logging(debug=config.debug_logging)
        configure_metrics(config.observability.metrics_enabled)

        events = self.container.event_channel
        events.add_listener(track_session_event)
        events.add_listener(self._on_session_event)

        profiles = self.container.profile_store
        sessions = self.container.session_manager

        session = sessions.start()
        user = profiles.get_current_user()
        if session is not None and user is not None and user.id == session.user_id:
            self._user = user
            logger.info(f"app: restored sign-in user_id={user.id}")
        else:
            if session is not None:
                sessions.clear_session()
            profiles.clear_current_user()
            self._user = None

        self.container.autosaver.start()
        self._started = True
        logger.info(f"app: started env={config.app_env} authenticated={self.is_authenticated}")

    async def shutdown(self) -> None:
        if not self._started:
            return
        self._started = False

        self.container.autosaver.stop()
        if "status_poller" in self.container.__dict__:
            self.container.status_poller.stop()
        self.container.session_manager.cleanup()
        events = self.container.event_channel
        events.remove_listener(self._on_session_event)
        events.remove_listener(track_session_event)
        await self.container.aclose()
        logger.info("app: stopped")

    def signup(self, name: str, email: str, password: str) -> UserProfile:
        profile, _session = self.container.register_user_use_case.execute(name, email, password)
        self._user = profile
        return profile

    def login(self, email: str, password: str) -> UserProfile:
        profile, _session = self.container.login_user_use_case.execute(email, password)
        self._user = profile
        return profile

    def logout(self) -> None:
        self.container.logout_user_use_case.execute()
        self._user = None

    def update_profile(self, name: str) -> UserProfile:
        profile = self.container.update_profile_use_case.execute(name)
        self._user = profile
        return profile

    def restore_work(self) -> WorkInProgress | None:
        return self.container.session_manager.restore_work_in_progress()

    def discard_work(self) -> None:
        self.container.session_manager.clear_work_backup()
        self.container.session_manager.stage_work_in_progress(None)

    def banner_for(self, failure: AppError) -> Banner:
        return banner_for(failure, dismiss_after=self.container.config.ui.transient_banner_seconds)

    def _on_session_event(self, event: SessionEvent) -> None:
        if event.kind is SessionEventKind.EXPIRED:
            self.container.profile_store.clear_current_user()
            self._user = None
            logger.info("app: session expired, signed out")


def create_app(config: AppConfig | None = None, **overrides) -> Application:
    configure_logging = overrides.pop("configure_logging", True)
    return Application(Container(config, **overrides), configure_logging=configure_logging)


__all__ = ["Application", "create_app"]
