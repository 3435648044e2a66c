# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bounded retries with linear backoff for outbound provider calls."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from syntrio.infrastructure.observability import record_retry
from syntrio.shared.errors import TransientNetworkError
from syntrio.shared.logging import logger

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Per-attempt timeout plus up to ``max_retries`` retries.

    The wait before retry ``n`` is ``n * base_delay``; only
    :class:`TransientNetworkError` is retried.
    """

    timeout: float
    max_retries: int = 3
    base_delay: float = 2.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff_schedule(self) -> tuple[float, ...]:
        return tuple(self.base_delay * attempt for attempt in range(1, self.max_retries + 1))


def _log_retry(provider: str) -> Callable[[RetryCallState], None]:
    def before_sleep(state: RetryCallState) -> None:
        outcome = state.outcome
        error = outcome.exception() if outcome is not None else None
        wait = state.next_action.sleep if state.next_action is not None else 0.0
        logger.warning(
            f"resilience: retrying provider={provider} attempt={state.attempt_number} "
            f"wait={wait:.1f}s error={error}"
        )
        record_retry(provider)

    return before_sleep


async def resilient_call(  # noqa: UP047
    func: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy,
    provider: str = "unknown",
    sleep: Sleep = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """Run ``func`` until it succeeds, raises a non-transient error, or retries run out."""

    retry = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_incrementing(start=policy.base_delay, increment=policy.base_delay),
        retry=retry_if_exception_type(TransientNetworkError),
        before_sleep=_log_retry(provider),
        sleep=sleep,
        reraise=True,
    )

    async for attempt in retry:
        with attempt:
            logger.debug(
                f"resilience: attempt={attempt.retry_state.attempt_number}/{policy.max_attempts} "
                f"provider={provider}"
            )
            return await func(*args, **kwargs)

    raise RuntimeError("resilience: reached unexpected branch")


__all__ = ["RetryPolicy", "resilient_call"]
