# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from syntrio.domain.users.repositories import PasswordHasher


class ScryptPasswordHasher(PasswordHasher):
    """Salted scrypt hashes via werkzeug; replaces the old fixed-salt encoding."""

    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            # Unknown or truncated hash format
            return False
