# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Format and live checks for provider API keys."""

from __future__ import annotations

import asyncio
import math
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from syntrio.application.interfaces import Clock
from syntrio.infrastructure.resilience import Sleep
from syntrio.shared.errors import TransientNetworkError
from syntrio.shared.logging import logger, mask_api_key


class KeyCheckKind(StrEnum):
    FORMAT = "format"
    AUTH = "auth"
    NETWORK = "network"


@dataclass(slots=True, frozen=True)
class KeyCheckResult:
    is_valid: bool
    message: str
    error_type: KeyCheckKind | None = None


@dataclass(slots=True, frozen=True)
class KeyFormatInfo:
    pattern: str
    example: str
    description: str


class ApiKeyValidator(ABC):
    """Throttled key validation: format first, then one cheap authenticated probe."""

    display_name = "provider"
    formats: dict[str, re.Pattern[str]] = {}
    format_info: KeyFormatInfo
    format_error = "Invalid API key format"
    min_interval = 2.0

    def __init__(
        self,
        *,
        base_url: str,
        http: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._clock = clock
        self._sleep = sleep
        self._last_validation: float | None = None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def supported_format(self) -> KeyFormatInfo:
        return self.format_info

    def detect_key_format(self, api_key: str | None) -> str:
        if not api_key:
            return "unknown"
        key = api_key.strip()
        for name, pattern in self.formats.items():
            if pattern.match(key):
                return name
        return "unknown"

    def validate_format_only(self, api_key: str | None) -> KeyCheckResult:
        if api_key is None or not isinstance(api_key, str):
            return KeyCheckResult(False, "API key is required", KeyCheckKind.FORMAT)
        if not api_key.strip():
            return KeyCheckResult(False, "API key cannot be empty", KeyCheckKind.FORMAT)

        detected = self.detect_key_format(api_key)
        if detected == "unknown":
            return KeyCheckResult(False, self.format_error, KeyCheckKind.FORMAT)
        return KeyCheckResult(True, self._format_ok_message(detected))

    def _format_ok_message(self, detected: str) -> str:
        return "Valid API key format"

    async def validate_api_key(self, api_key: str | None) -> KeyCheckResult:
        throttled = self._check_throttle()
        if throttled is not None:
            return throttled

        formatted = self.validate_format_only(api_key)
        if not formatted.is_valid or api_key is None:
            return formatted

        self._last_validation = self._clock()
        return await self._validate_with_api(api_key.strip())

    def _check_throttle(self) -> KeyCheckResult | None:
        if self._last_validation is None:
            return None
        elapsed = self._clock() - self._last_validation
        if elapsed >= self.min_interval:
            return None
        remaining = math.ceil(self.min_interval - elapsed)
        return KeyCheckResult(
            False,
            f"Please wait {remaining} seconds before validating again",
            KeyCheckKind.NETWORK,
        )

    async def _validate_with_api(self, api_key: str) -> KeyCheckResult:
        logger.info(f"keys: validating {self.display_name} key={mask_api_key(api_key)}")
        retry = AsyncRetrying(
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_fixed(self._retry_delay),
            retry=retry_if_exception_type(TransientNetworkError),
            sleep=self._sleep,
            reraise=True,
        )
        try:
            async for attempt in retry:
                with attempt:
                    return await self._probe_once(api_key)
        except TransientNetworkError as exc:
            logger.warning(f"keys: {self.display_name} validation gave up message={exc.message}")
            return KeyCheckResult(False, exc.message, KeyCheckKind.NETWORK)
        raise RuntimeError("keys: reached unexpected branch")

    async def _probe_once(self, api_key: str) -> KeyCheckResult:
        try:
            response = await self._send_probe(api_key)
        except httpx.TimeoutException as exc:
            raise TransientNetworkError(
                "Validation request timed out. Please check your internet connection"
            ) from exc
        except httpx.TransportError as exc:
            raise TransientNetworkError(
                f"Unable to connect to {self.display_name} API. Please check your internet connection"
            ) from exc

        status = response.status_code
        if response.is_success:
            return KeyCheckResult(True, "API key validated successfully")
        if status in (401, 403):
            return KeyCheckResult(
                False,
                f"Invalid API key. Please verify your {self.display_name} API key",
                KeyCheckKind.AUTH,
            )
        if status == 429:
            return KeyCheckResult(False, "Rate limit exceeded. Please try again later", KeyCheckKind.NETWORK)
        if status >= 500:
            raise TransientNetworkError(
                f"{self.display_name} service is temporarily unavailable. Please try again later",
                status_code=status,
            )
        return KeyCheckResult(False, f"API validation failed with status {status}", KeyCheckKind.AUTH)

    @abstractmethod
    async def _send_probe(self, api_key: str) -> httpx.Response:
        """One authenticated request whose status tells whether the key works."""


class TavusKeyValidator(ApiKeyValidator):
    display_name = "Tavus"
    formats = {
        "tavus": re.compile(r"^tavus_[a-zA-Z0-9]+$", re.IGNORECASE),
        "alphanumeric": re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE),
    }
    format_info = KeyFormatInfo(
        pattern="tavus_[alphanumeric] or 32-character hex",
        example="tavus_abc123def456 or aa6a1b2c3d4e5f6789012345678904643",
        description="Tavus API keys can be either 'tavus_' prefixed or 32-character hexadecimal strings",
    )
    format_error = (
        "Invalid API key format. Expected: 'tavus_[alphanumeric]' or 32-character hex string"
    )

    def _format_ok_message(self, detected: str) -> str:
        if detected == "tavus":
            return "Valid Tavus API key format"
        return "Valid alphanumeric API key format"

    async def _send_probe(self, api_key: str) -> httpx.Response:
        return await self._http.get(
            f"{self._base_url}/replicas",
            headers={"x-api-key": api_key, "Accept": "application/json"},
            timeout=self._timeout,
        )


class LingoKeyValidator(ApiKeyValidator):
    display_name = "Lingo.dev"
    formats = {"lingo": re.compile(r"^api_[a-zA-Z0-9]+$", re.IGNORECASE)}
    format_info = KeyFormatInfo(
        pattern="api_[alphanumeric]",
        example="api_abc123def456",
        description="Lingo.dev API keys start with 'api_' followed by alphanumeric characters",
    )
    format_error = "Invalid API key format. Expected format: api_[alphanumeric characters]"

    async def _send_probe(self, api_key: str) -> httpx.Response:
        return await self._http.post(
            f"{self._base_url}/translate",
            json={"text": "test", "source_language": "en", "target_language": "es"},
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self._timeout,
        )


__all__ = [
    "ApiKeyValidator",
    "KeyCheckKind",
    "KeyCheckResult",
    "KeyFormatInfo",
    "LingoKeyValidator",
    "TavusKeyValidator",
]
