# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .conversations import ConversationPayloadDTO
from .translations import TranslationPayloadDTO
from .users import LoginRequestDTO, ProfileUpdateDTO, SignupRequestDTO

__all__ = [
    "ConversationPayloadDTO",
    "LoginRequestDTO",
    "ProfileUpdateDTO",
    "SignupRequestDTO",
    "TranslationPayloadDTO",
]
