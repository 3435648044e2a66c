# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Polls a conversation until the provider reports it ended or failed."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from syntrio.application.interfaces import ConversationStatusSource
from syntrio.domain.conversations import ConversationStatus
from syntrio.shared.logging import logger

StatusCallback = Callable[[ConversationStatus | None], None]
Sleep = Callable[[float], Awaitable[None]]


class ConversationStatusPoller:
    """Fixed-interval polling; a failed poll means "unknown", never "over"."""

    def __init__(
        self,
        *,
        client: ConversationStatusSource,
        interval: float = 5.0,
        error_interval: float = 10.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._interval = interval
        self._error_interval = error_interval
        self._sleep = sleep
        self._task: asyncio.Task[ConversationStatus] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(
        self,
        conversation_id: str,
        on_status: StatusCallback | None = None,
    ) -> ConversationStatus:
        while True:
            try:
                status = await self._client.get_conversation_status(conversation_id)
            except Exception:
                logger.exception(f"poller: status check failed conversation_id={conversation_id}")
                status = None

            if on_status is not None:
                on_status(status)

            if status is None:
                await self._sleep(self._error_interval)
                continue

            if not status.keeps_polling:
                logger.info(f"poller: finished conversation_id={conversation_id} status={status.status}")
                return status

            await self._sleep(self._interval)

    def start(
        self,
        conversation_id: str,
        on_status: StatusCallback | None = None,
    ) -> asyncio.Task[ConversationStatus]:
        self.stop()
        self._task = asyncio.create_task(self.run(conversation_id, on_status))
        return self._task

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None


__all__ = ["ConversationStatusPoller"]
