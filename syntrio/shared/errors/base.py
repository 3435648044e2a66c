# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    message: str
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class ValidationError(AppError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "validation_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, message=message, context=context)


class AuthError(AppError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "auth_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, message=message, context=context)


class InvalidCredentialsError(AuthError):
    def __init__(self, message: str = "Incorrect password. Please try again.") -> None:
        super().__init__(message, code="invalid_credentials")


class InvalidApiKeyError(AuthError):
    def __init__(self, provider: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Invalid API key. Please check your {provider} API key.",
            code="invalid_api_key",
            context={"provider": provider},
        )


class ApiKeyNotConfiguredError(AuthError):
    def __init__(self, provider: str) -> None:
        super().__init__(
            f"{provider} API key is not configured.",
            code="api_key_not_configured",
            context={"provider": provider},
        )


class NotFoundError(AppError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "not_found",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, message=message, context=context)


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, code="user_not_found", context=context)


class ReplicaNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(
            "Replica not found. Please check your replica ID.",
            code="replica_not_found",
        )


class DuplicateError(AppError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "duplicate",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, message=message, context=context)


class DuplicateEmailError(DuplicateError):
    def __init__(self) -> None:
        super().__init__(
            "An account with this email address already exists",
            code="duplicate_email",
        )


class RateLimitedError(AppError):
    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        *,
        remote: bool = False,
    ) -> None:
        super().__init__(code="rate_limited", message=message, context={"remote": remote})


class TransientNetworkError(AppError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        context = {"status_code": status_code} if status_code is not None else None
        super().__init__(code="transient_network_error", message=message, context=context)


class QuotaExhaustedError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(code="quota_exhausted", message=message)


class ProtocolError(AppError):
    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(code="protocol_error", message=message, context=context)


class StorageError(AppError):
    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(
            code="storage_error",
            message=message,
            context={"key": key} if key else None,
        )
