# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .local_session_repository import LocalSessionRepository, LocalWorkBackupRepository

__all__ = ["LocalSessionRepository", "LocalWorkBackupRepository"]
