# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from syntrio.shared.errors.validation_types import ValidationErrorType

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _check_name(value: Any) -> str:
    name = _as_text(value).strip()
    if not name:
        raise PydanticCustomError(
            ValidationErrorType.MISSING,
            "Full name is required",
            {},
        )
    if len(name) < MIN_NAME_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.TOO_SHORT,
            "Full name must be at least 2 characters long",
            {"min_length": MIN_NAME_LENGTH},
        )
    return name


class SignupRequestDTO(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return _check_name(value)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        email = _as_text(value).strip()
        if not email:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Email address is required",
                {},
            )
        if "@" not in email or "." not in email:
            raise PydanticCustomError(
                ValidationErrorType.EMAIL_INVALID,
                "Please enter a valid email address",
                {},
            )
        return email.lower()

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value: Any) -> str:
        password = _as_text(value)
        if not password:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Password is required",
                {},
            )
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.TOO_SHORT,
                "Password must be at least 6 characters long",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return password


class LoginRequestDTO(BaseModel):
    email: str
    password: str  # No strength check on login

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        email = _as_text(value).strip()
        if not email:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Please enter your email address",
                {},
            )
        return email.lower()

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value: Any) -> str:
        password = _as_text(value)
        if not password:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Please enter your password",
                {},
            )
        return password


class ProfileUpdateDTO(BaseModel):
    name: str

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return _check_name(value)
