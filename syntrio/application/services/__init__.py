# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .autosave import WorkInProgressAutosaver
from .password_hashing import ScryptPasswordHasher
from .profile_store import ProfileStore
from .session_lifecycle import SessionLifecycleManager, format_time_remaining

__all__ = [
    "ProfileStore",
    "ScryptPasswordHasher",
    "SessionLifecycleManager",
    "WorkInProgressAutosaver",
    "format_time_remaining",
]
