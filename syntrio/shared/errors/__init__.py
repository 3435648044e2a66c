from .base import (
    ApiKeyNotConfiguredError,
    AppError,
    AuthError,
    DuplicateEmailError,
    DuplicateError,
    InvalidApiKeyError,
    InvalidCredentialsError,
    NotFoundError,
    ProtocolError,
    QuotaExhaustedError,
    RateLimitedError,
    ReplicaNotFoundError,
    StorageError,
    TransientNetworkError,
    UserNotFoundError,
    ValidationError,
)
from .validation import first_error_message, format_pydantic_errors, raise_validation_error

__all__ = [
    "ApiKeyNotConfiguredError",
    "AppError",
    "AuthError",
    "DuplicateEmailError",
    "DuplicateError",
    "InvalidApiKeyError",
    "InvalidCredentialsError",
    "NotFoundError",
    "ProtocolError",
    "QuotaExhaustedError",
    "RateLimitedError",
    "ReplicaNotFoundError",
    "StorageError",
    "TransientNetworkError",
    "UserNotFoundError",
    "ValidationError",
    "first_error_message",
    "format_pydantic_errors",
    "raise_validation_error",
]
