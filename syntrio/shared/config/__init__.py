# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    LingoConfig,
    ResilienceConfig,
    SessionConfig,
    StorageConfig,
    TavusConfig,
    UiConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "LingoConfig",
    "ResilienceConfig",
    "SessionConfig",
    "StorageConfig",
    "TavusConfig",
    "UiConfig",
    "load_config",
]
