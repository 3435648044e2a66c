# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import UserProfile, UserRecord, UserStats
from .repositories import CurrentUserStore, PasswordHasher, UserRepository

__all__ = [
    "CurrentUserStore",
    "PasswordHasher",
    "UserProfile",
    "UserRecord",
    "UserRepository",
    "UserStats",
]
