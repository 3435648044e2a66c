# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .models import KeyValueEntry
from .session import Base, build_engine, init_db, make_session_factory, session_scope

__all__ = [
    "Base",
    "KeyValueEntry",
    "build_engine",
    "init_db",
    "make_session_factory",
    "session_scope",
]
