from __future__ import annotations

import asyncio

import pytest

from syntrio.application.use_cases.conversations.poll_status import ConversationStatusPoller
from syntrio.domain.conversations import ConversationStatus, ConversationStatusKind


class ScriptedStatusSource:
    def __init__(self, *replies) -> None:
        self.replies = list(replies)
        self.calls = 0

    async def get_conversation_status(self, conversation_id: str) -> ConversationStatus | None:
        self.calls += 1
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if reply is None:
            return None
        return ConversationStatus(conversation_id=conversation_id, status=reply)


@pytest.mark.asyncio
async def test_polls_until_terminal_status(recording_sleep):
    source = ScriptedStatusSource(
        ConversationStatusKind.CREATING,
        None,
        RuntimeError("socket closed"),
        ConversationStatusKind.ACTIVE,
        ConversationStatusKind.ENDED,
    )
    poller = ConversationStatusPoller(client=source, interval=5, error_interval=10, sleep=recording_sleep)
    seen = []

    final = await poller.run("c_123", seen.append)

    assert final.status is ConversationStatusKind.ENDED
    assert source.calls == 5
    assert recording_sleep.calls == [5, 10, 10, 5]
    assert [status.status if status else None for status in seen] == [
        ConversationStatusKind.CREATING,
        None,
        None,
        ConversationStatusKind.ACTIVE,
        ConversationStatusKind.ENDED,
    ]


@pytest.mark.asyncio
async def test_failed_status_also_stops_polling(recording_sleep):
    source = ScriptedStatusSource(ConversationStatusKind.FAILED)
    poller = ConversationStatusPoller(client=source, sleep=recording_sleep)

    final = await poller.run("c_123")

    assert final.status is ConversationStatusKind.FAILED
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_stop_cancels_background_task():
    source = ScriptedStatusSource(*([ConversationStatusKind.ACTIVE] * 100))
    poller = ConversationStatusPoller(client=source, interval=0.01)

    task = poller.start("c_123")
    await asyncio.sleep(0.03)
    assert poller.running

    poller.stop()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert not poller.running
