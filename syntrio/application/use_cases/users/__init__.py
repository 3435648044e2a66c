# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .login_user import LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .register_user import RegisterUserUseCase
from .update_profile import UpdateProfileUseCase

__all__ = [
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "UpdateProfileUseCase",
]
