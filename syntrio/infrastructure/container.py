# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
import time
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session as DbSession
from sqlalchemy.orm import sessionmaker

from syntrio.application.interfaces import Clock, KeyValueStore, TimerScheduler
from syntrio.application.services.autosave import WorkInProgressAutosaver
from syntrio.application.services.password_hashing import ScryptPasswordHasher
from syntrio.application.services.profile_store import ProfileStore
from syntrio.application.services.session_lifecycle import SessionLifecycleManager
from syntrio.application.use_cases.conversations.poll_status import ConversationStatusPoller
from syntrio.application.use_cases.users import (
    LoginUserUseCase,
    LogoutUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from syntrio.domain.users import PasswordHasher
from syntrio.infrastructure.activity import ActivityMonitor
from syntrio.infrastructure.api_keys import LingoKeyValidator, TavusKeyValidator
from syntrio.infrastructure.db import build_engine, init_db, make_session_factory
from syntrio.infrastructure.events import SessionEventChannel
from syntrio.infrastructure.lingo import LingoTranslationClient
from syntrio.infrastructure.rate_limit import RollingHourlyRateLimiter
from syntrio.infrastructure.repositories.sessions import (
    LocalSessionRepository,
    LocalWorkBackupRepository,
)
from syntrio.infrastructure.repositories.users import LocalCurrentUserStore, LocalUserRepository
from syntrio.infrastructure.resilience import RetryPolicy, Sleep
from syntrio.infrastructure.storage import SqlAlchemyKeyValueStore
from syntrio.infrastructure.tavus import TavusConversationClient
from syntrio.infrastructure.timers import AsyncioTimerScheduler
from syntrio.shared.config import AppConfig, load_config


class Container:
    """Builds every service once; overrides exist for tests and embedding hosts."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        store: KeyValueStore | None = None,
        scheduler: TimerScheduler | None = None,
        password_hasher: PasswordHasher | None = None,
        clock: Clock = time.time,
        sleep: Sleep = asyncio.sleep,
        device_info: str | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._scheduler = scheduler
        self._password_hasher = password_hasher
        self.clock = clock
        self.sleep = sleep
        self.device_info = device_info

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    # Storage

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.storage.url, pool_timeout=self.config.storage.pool_timeout)

    @cached_property
    def session_factory(self) -> sessionmaker[DbSession]:
        return make_session_factory(self.engine)

    @cached_property
    def kv_store(self) -> KeyValueStore:
        if self._store is not None:
            return self._store
        init_db(self.engine)
        return SqlAlchemyKeyValueStore(self.session_factory)

    # Users

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or ScryptPasswordHasher()

    @cached_property
    def user_repository(self) -> LocalUserRepository:
        return LocalUserRepository(self.kv_store)

    @cached_property
    def current_user_store(self) -> LocalCurrentUserStore:
        return LocalCurrentUserStore(self.kv_store)

    @cached_property
    def profile_store(self) -> ProfileStore:
        return ProfileStore(
            users=self.user_repository,
            current_user=self.current_user_store,
            password_hasher=self.password_hasher,
            clock=self.clock,
        )

    # Sessions

    @cached_property
    def scheduler(self) -> TimerScheduler:
        return self._scheduler or AsyncioTimerScheduler()

    @cached_property
    def activity_monitor(self) -> ActivityMonitor:
        return ActivityMonitor()

    @cached_property
    def event_channel(self) -> SessionEventChannel:
        return SessionEventChannel()

    @cached_property
    def session_repository(self) -> LocalSessionRepository:
        return LocalSessionRepository(self.kv_store)

    @cached_property
    def work_backup_repository(self) -> LocalWorkBackupRepository:
        return LocalWorkBackupRepository(self.kv_store)

    @cached_property
    def session_manager(self) -> SessionLifecycleManager:
        return SessionLifecycleManager(
            sessions=self.session_repository,
            backups=self.work_backup_repository,
            scheduler=self.scheduler,
            activity=self.activity_monitor,
            events=self.event_channel,
            config=self.config.session,
            clock=self.clock,
            device_info=self.device_info,
        )

    @cached_property
    def autosaver(self) -> WorkInProgressAutosaver:
        return WorkInProgressAutosaver(
            sessions=self.session_manager,
            scheduler=self.scheduler,
            interval=self.config.session.autosave_interval,
        )

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(profiles=self.profile_store, sessions=self.session_manager)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(profiles=self.profile_store, sessions=self.session_manager)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(profiles=self.profile_store, sessions=self.session_manager)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(profiles=self.profile_store)

    # Providers

    def _retry_policy(self, timeout: float) -> RetryPolicy:
        resilience = self.config.resilience
        return RetryPolicy(
            timeout=timeout,
            max_retries=resilience.max_retries,
            base_delay=resilience.backoff_base,
        )

    @cached_property
    def tavus_client(self) -> TavusConversationClient:
        tavus = self.config.tavus
        return TavusConversationClient(
            api_key=tavus.api_key,
            base_url=tavus.base_url,
            policy=self._retry_policy(tavus.timeout),
            limiter=RollingHourlyRateLimiter(tavus.hourly_quota, clock=self.clock),
            minutes_available=tavus.minutes_available,
            sleep=self.sleep,
        )

    @cached_property
    def lingo_client(self) -> LingoTranslationClient:
        lingo = self.config.lingo
        return LingoTranslationClient(
            api_key=lingo.api_key,
            base_url=lingo.base_url,
            policy=self._retry_policy(lingo.timeout),
            limiter=RollingHourlyRateLimiter(lingo.hourly_quota, clock=self.clock),
            sleep=self.sleep,
        )

    @cached_property
    def tavus_key_validator(self) -> TavusKeyValidator:
        return TavusKeyValidator(base_url=self.config.tavus.base_url, sleep=self.sleep)

    @cached_property
    def lingo_key_validator(self) -> LingoKeyValidator:
        return LingoKeyValidator(base_url=self.config.lingo.base_url, sleep=self.sleep)

    @cached_property
    def status_poller(self) -> ConversationStatusPoller:
        return ConversationStatusPoller(
            client=self.tavus_client,
            interval=self.config.ui.poll_interval,
            error_interval=self.config.ui.poll_error_interval,
            sleep=self.sleep,
        )

    async def aclose(self) -> None:
        built = self.__dict__
        for name in ("tavus_client", "lingo_client", "tavus_key_validator", "lingo_key_validator"):
            if name in built:
                await built[name].aclose()
        if "engine" in built:
            built["engine"].dispose()


__all__ = ["Container"]
