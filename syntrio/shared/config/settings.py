# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseSettings):
    url: str = Field("sqlite:///instance/syntrio.db")
    pool_timeout: float = Field(30.0, ge=0.1)

    model_config = SettingsConfigDict(env_prefix="STORAGE_", extra="ignore")


class SessionConfig(BaseSettings):
    # All values in seconds
    duration: float = Field(24 * 60 * 60, gt=0)
    warning_window: float = Field(5 * 60, ge=0)
    activity_threshold: float = Field(30.0, ge=0)
    backup_freshness: float = Field(24 * 60 * 60, gt=0)
    autosave_interval: float = Field(30.0, gt=0)

    model_config = SettingsConfigDict(env_prefix="SESSION_", extra="ignore")


class ResilienceConfig(BaseSettings):
    max_retries: int = Field(3, ge=0)
    backoff_base: float = Field(2.0, ge=0)

    model_config = SettingsConfigDict(env_prefix="RESILIENCE_", extra="ignore")


class TavusConfig(BaseSettings):
    api_key: str = Field("")
    base_url: str = Field("https://tavusapi.com/v2")
    timeout: float = Field(30.0, ge=0.1)
    hourly_quota: int = Field(50, ge=1)
    minutes_available: int = Field(250, ge=0)

    model_config = SettingsConfigDict(env_prefix="TAVUS_", extra="ignore")


class LingoConfig(BaseSettings):
    api_key: str = Field("")
    base_url: str = Field("https://api.lingo.dev/v1")
    timeout: float = Field(10.0, ge=0.1)
    hourly_quota: int = Field(100, ge=1)

    model_config = SettingsConfigDict(env_prefix="LINGO_", extra="ignore")


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True)

    model_config = SettingsConfigDict(extra="ignore")

    @field_validator("metrics_enabled", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class UiConfig(BaseSettings):
    transient_banner_seconds: float = Field(8.0, ge=0)
    poll_interval: float = Field(5.0, gt=0)
    poll_error_interval: float = Field(10.0, gt=0)

    model_config = SettingsConfigDict(env_prefix="UI_", extra="ignore")


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _resilience_config_factory() -> ResilienceConfig:
    return ResilienceConfig()  # type: ignore[call-arg]


def _tavus_config_factory() -> TavusConfig:
    return TavusConfig()  # type: ignore[call-arg]


def _lingo_config_factory() -> LingoConfig:
    return LingoConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


def _ui_config_factory() -> UiConfig:
    return UiConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    resilience: ResilienceConfig = Field(default_factory=_resilience_config_factory)
    tavus: TavusConfig = Field(default_factory=_tavus_config_factory)
    lingo: LingoConfig = Field(default_factory=_lingo_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)
    ui: UiConfig = Field(default_factory=_ui_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        missing = []
        if not self.tavus.api_key:
            missing.append("TAVUS_API_KEY")
        if not self.lingo.api_key:
            missing.append("LINGO_API_KEY")

        if missing:
            print(
                "\n❌ CRITICAL CONFIGURATION ERROR: provider API keys missing in production!\n"
                f"   Set {', '.join(missing)} in the environment or .env file.\n"
                "   Keys are never shipped inline with the application.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.storage.url.startswith("sqlite:///:memory:") or self.storage.url == "sqlite://":
            print(
                "\n⚠️  PRODUCTION WARNING: in-memory storage loses users and sessions on restart.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "LingoConfig",
    "ObservabilityConfig",
    "ResilienceConfig",
    "SessionConfig",
    "StorageConfig",
    "TavusConfig",
    "UiConfig",
    "load_config",
]
