# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .local_user_repository import LocalCurrentUserStore, LocalUserRepository

__all__ = ["LocalCurrentUserStore", "LocalUserRepository"]
