# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Shared plumbing for the JSON provider clients."""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from syntrio.infrastructure.observability import track_latency
from syntrio.infrastructure.rate_limit import RollingHourlyRateLimiter, UsageStats
from syntrio.infrastructure.resilience import RetryPolicy, Sleep, resilient_call
from syntrio.shared.errors import (
    ApiKeyNotConfiguredError,
    AppError,
    InvalidApiKeyError,
    ProtocolError,
    RateLimitedError,
    TransientNetworkError,
    ValidationError,
)
from syntrio.shared.logging import logger, mask_api_key


@dataclass(slots=True, frozen=True)
class ProviderMessages:
    display_name: str
    unavailable: str
    timeout: str
    network: str
    failure: str
    invalid_response: str


def parse_error_body(response: httpx.Response, default: str) -> str:
    """Pull a message out of an error body: JSON ``error``/``message``/``detail``, else raw text."""

    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        return text or default
    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            value = data.get(key)
            if value:
                return str(value)
        return default
    return text or default


def is_empty_response(response: httpx.Response) -> bool:
    return response.status_code == 204 or response.headers.get("content-length") == "0"


class ProviderHttpClient(ABC):
    """Rate-limited, retried JSON calls against one provider.

    Every network attempt, retries included, takes a slot from the rolling
    hourly limiter first. Non-2xx statuses and transport failures are turned
    into :class:`AppError` subclasses; only the transient ones are retried.
    """

    provider = "provider"
    messages: ProviderMessages

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        policy: RetryPolicy,
        limiter: RollingHourlyRateLimiter,
        http: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._policy = policy
        self._limiter = limiter
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=policy.timeout)
        self._sleep = sleep

    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def masked_api_key(self) -> str:
        return mask_api_key(self._api_key)

    def get_usage_stats(self) -> UsageStats:
        return self._limiter.get_usage_stats()

    def reset_usage_stats(self) -> None:
        self._limiter.reset()
        logger.info(f"{self.provider}: usage stats reset")

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        """Auth headers for the provider."""

    def _ensure_api_key(self) -> None:
        if not self._api_key:
            raise ApiKeyNotConfiguredError(self.messages.display_name)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        payload: dict[str, Any] | None = None,
        retry: bool = True,
        limited: bool = True,
    ) -> httpx.Response:
        self._ensure_api_key()
        if not retry:
            return await self._attempt(method, path, payload, limited)
        return await resilient_call(
            self._attempt,
            method,
            path,
            payload,
            limited,
            policy=self._policy,
            provider=self.provider,
            sleep=self._sleep,
        )

    async def _attempt(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None,
        limited: bool,
    ) -> httpx.Response:
        if limited and not self._limiter.allow():
            logger.warning(f"{self.provider}: local rate limit reached limit={self._limiter.limit}")
            raise RateLimitedError()

        url = f"{self._base_url}{path}"
        outcome = "error"

        def _outcome() -> str:
            return outcome

        logger.debug(f"{self.provider}: {method} {url} key={self.masked_api_key}")
        with track_latency(self.provider, _outcome):
            try:
                response = await self._http.request(
                    method,
                    url,
                    json=payload,
                    headers=self._headers(),
                    timeout=self._policy.timeout,
                )
            except httpx.TimeoutException as exc:
                outcome = "timeout"
                raise TransientNetworkError(self.messages.timeout) from exc
            except httpx.TransportError as exc:
                outcome = "network"
                raise TransientNetworkError(self.messages.network) from exc

            outcome = str(response.status_code)

        if response.is_success:
            return response

        message = parse_error_body(response, self.messages.failure)
        logger.warning(f"{self.provider}: http error status={response.status_code} message={message[:200]}")
        raise self._map_status(response.status_code, message)

    def _map_status(self, status: int, message: str) -> AppError:
        if status == 401:
            return InvalidApiKeyError(self.messages.display_name)
        if status == 429:
            return RateLimitedError(remote=True)
        if status == 400:
            return ValidationError(
                f"Invalid request parameters: {message}",
                code="provider_rejected",
                context={"status_code": status},
            )
        if status >= 500:
            return TransientNetworkError(self.messages.unavailable, status_code=status)
        return ProtocolError(message, context={"status_code": status})

    def _json_body(self, response: httpx.Response) -> dict[str, Any]:
        if is_empty_response(response):
            return {}
        try:
            data = response.json()
        except ValueError as exc:
            raise ProtocolError(self.messages.invalid_response) from exc
        if not isinstance(data, dict):
            raise ProtocolError(self.messages.invalid_response)
        return data


__all__ = [
    "ProviderHttpClient",
    "ProviderMessages",
    "is_empty_response",
    "parse_error_body",
]
