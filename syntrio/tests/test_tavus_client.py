from __future__ import annotations

import json

import httpx
import pytest

from syntrio.application.notifications import banner_for
from syntrio.domain.conversations import (
    ConversationRequest,
    ConversationStatusKind,
    format_conversational_context,
    generate_context_aware_greeting,
)
from syntrio.infrastructure.http import ProviderHttpClient
from syntrio.infrastructure.rate_limit import RollingHourlyRateLimiter
from syntrio.infrastructure.resilience import RetryPolicy
from syntrio.infrastructure.tavus import TavusConversationClient
from syntrio.shared.errors import (
    ApiKeyNotConfiguredError,
    InvalidApiKeyError,
    NotFoundError,
    ProtocolError,
    QuotaExhaustedError,
    RateLimitedError,
    ReplicaNotFoundError,
    TransientNetworkError,
    ValidationError,
)

BASE_URL = "https://tavus.test/v2"


class Recorder:
    """Replays queued responses and keeps every request it saw."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_client(recorder, clock, sleep, *, limit=50, api_key="tavus_test123", minutes=250):
    return TavusConversationClient(
        api_key=api_key,
        base_url=BASE_URL,
        policy=RetryPolicy(timeout=5.0, max_retries=3, base_delay=2.0),
        limiter=RollingHourlyRateLimiter(limit, clock=clock),
        http=httpx.AsyncClient(transport=httpx.MockTransport(recorder)),
        minutes_available=minutes,
        sleep=sleep,
    )


def created(**extra):
    body = {
        "conversation_id": "c_123",
        "conversation_url": "https://tavus.daily.co/c_123",
        "status": "active",
    }
    body.update(extra)
    return httpx.Response(200, json=body)


def request(**overrides):
    fields = {
        "replica_id": "r4dcf31b60e1",
        "conversation_name": "Quantum basics",
        "custom_greeting": "Hello there",
    }
    fields.update(overrides)
    return ConversationRequest(**fields)


@pytest.mark.asyncio
async def test_create_sends_context_aware_payload(clock, recording_sleep):
    recorder = Recorder(created(expires_at="2025-01-01T00:00:00Z"))
    client = make_client(recorder, clock, recording_sleep)
    topic = "Quantum computing basics. Especially qubits."

    result = await client.create_conversation(request(conversational_context=topic))

    assert result.success
    assert result.conversation_id == "c_123"
    assert result.conversation_url == "https://tavus.daily.co/c_123"
    assert result.status is ConversationStatusKind.ACTIVE
    assert result.expires_at == "2025-01-01T00:00:00Z"

    sent = recorder.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == f"{BASE_URL}/conversations"
    assert sent.headers["x-api-key"] == "tavus_test123"
    body = json.loads(sent.content)
    assert body["replica_id"] == "r4dcf31b60e1"
    assert body["custom_greeting"] == generate_context_aware_greeting(topic)
    assert body["conversational_context"] == format_conversational_context(topic)
    assert body["properties"] == {
        "max_call_duration": 1800,
        "participant_left_timeout": 60,
        "participant_absent_timeout": 300,
        "language": "english",
    }
    assert client.get_conversation_usage().current_month_usage == 1


@pytest.mark.asyncio
async def test_create_without_context_keeps_custom_greeting(clock, recording_sleep):
    recorder = Recorder(httpx.Response(200, json={"conversation_id": "c_1"}))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request(custom_greeting="  Hi!  "))

    body = json.loads(recorder.requests[0].content)
    assert body["custom_greeting"] == "Hi!"
    assert "conversational_context" not in body
    assert result.status is ConversationStatusKind.CREATING


def test_context_formatting():
    assert format_conversational_context("   ") == ""
    assert format_conversational_context(" Jazz history ").startswith("The user wants to discuss: Jazz history ")
    greeting = generate_context_aware_greeting("A" * 60 + ". More")
    assert "a" * 47 + "..." in greeting


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"replica_id": "", "conversation_name": ""}, "Replica ID is required for conversation creation"),
        ({"conversation_name": "  "}, "Conversation name is required"),
        ({"custom_greeting": ""}, "Custom greeting is required for conversation"),
        ({"custom_greeting": "x" * 501}, "Custom greeting exceeds maximum length of 500 characters"),
        (
            {"conversational_context": "x" * 2001},
            "Conversational context exceeds maximum length of 2000 characters",
        ),
    ],
)
async def test_create_validation_makes_no_network_call(clock, recording_sleep, overrides, message):
    recorder = Recorder(created())
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request(**overrides))

    assert not result.success
    assert isinstance(result.failure, ValidationError)
    assert result.error == message
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_transient_failures_are_retried_with_linear_backoff(clock, recording_sleep):
    recorder = Recorder(
        httpx.Response(503, json={"error": "busy"}),
        httpx.Response(502, text="bad gateway"),
        created(),
    )
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request())

    assert result.success
    assert len(recorder.requests) == 3
    assert recording_sleep.calls == [2.0, 4.0]


@pytest.mark.asyncio
async def test_retries_give_up_after_three(clock, recording_sleep):
    recorder = Recorder(httpx.Response(500, json={"error": "boom"}))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request())

    assert not result.success
    assert isinstance(result.failure, TransientNetworkError)
    assert result.error == "Tavus service is temporarily unavailable. Please try again later."
    assert len(recorder.requests) == 4
    assert recording_sleep.calls == [2.0, 4.0, 6.0]
    assert client.get_conversation_usage().current_month_usage == 0


@pytest.mark.asyncio
async def test_timeouts_are_retried(clock, recording_sleep):
    recorder = Recorder(httpx.ReadTimeout("slow"))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request())

    assert isinstance(result.failure, TransientNetworkError)
    assert result.error == "Conversation request timed out. Please try again."
    assert len(recorder.requests) == 4


@pytest.mark.asyncio
async def test_connection_errors_are_retried(clock, recording_sleep):
    recorder = Recorder(httpx.ConnectError("refused"), created())
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request())

    assert result.success
    assert recording_sleep.calls == [2.0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "error_type", "message"),
    [
        (
            httpx.Response(401, json={"error": "nope"}),
            InvalidApiKeyError,
            "Invalid API key. Please check your Tavus API key.",
        ),
        (
            httpx.Response(400, json={"message": "bad replica"}),
            ValidationError,
            "Invalid request parameters: bad replica",
        ),
        (
            httpx.Response(402, json={"error": "pay up"}),
            QuotaExhaustedError,
            "Insufficient credits or conversation minutes. Please check your Tavus account.",
        ),
        (
            httpx.Response(404, json={"error": "missing"}),
            ReplicaNotFoundError,
            "Replica not found. Please check your replica ID.",
        ),
        (
            httpx.Response(429, json={"error": "slow down"}),
            RateLimitedError,
            "Rate limit exceeded. Please try again later.",
        ),
        (httpx.Response(409, text="conflict happened"), ProtocolError, "conflict happened"),
    ],
)
async def test_client_errors_are_not_retried(clock, recording_sleep, response, error_type, message):
    recorder = Recorder(response)
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request())

    assert isinstance(result.failure, error_type)
    assert result.error == message
    assert len(recorder.requests) == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_malformed_success_body(clock, recording_sleep):
    recorder = Recorder(httpx.Response(200, text="<html>"))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.create_conversation(request())

    assert isinstance(result.failure, ProtocolError)
    assert result.error == "Invalid response format from conversation service"


@pytest.mark.asyncio
async def test_local_rate_limit_blocks_before_network(clock, recording_sleep):
    recorder = Recorder(created())
    client = make_client(recorder, clock, recording_sleep, limit=2)

    assert (await client.create_conversation(request())).success
    assert (await client.create_conversation(request())).success
    third = await client.create_conversation(request())

    assert isinstance(third.failure, RateLimitedError)
    assert len(recorder.requests) == 2
    assert client.get_usage_stats().remaining_requests == 0

    client.reset_usage_stats()
    assert (await client.create_conversation(request())).success


@pytest.mark.asyncio
async def test_retries_consume_rate_limit_slots(clock, recording_sleep):
    recorder = Recorder(httpx.Response(503), created())
    client = make_client(recorder, clock, recording_sleep, limit=1)

    result = await client.create_conversation(request())

    assert isinstance(result.failure, RateLimitedError)
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_no_minutes_left(clock, recording_sleep):
    recorder = Recorder(created())
    client = make_client(recorder, clock, recording_sleep)
    usage = client.update_conversation_usage(total_minutes_used=250)

    result = await client.create_conversation(request())

    assert usage.remaining_minutes == 0
    assert isinstance(result.failure, QuotaExhaustedError)
    assert result.error == "No conversation minutes remaining. Please check your Tavus account."
    assert recorder.requests == []
    assert banner_for(result.failure).persistent


@pytest.mark.asyncio
async def test_missing_api_key(clock, recording_sleep):
    recorder = Recorder(created())
    client = make_client(recorder, clock, recording_sleep, api_key="")

    result = await client.create_conversation(request())

    assert not client.is_configured()
    assert isinstance(result.failure, ApiKeyNotConfiguredError)
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_status_lookup(clock, recording_sleep):
    recorder = Recorder(
        httpx.Response(200, json={"status": "ended", "participants": 2, "duration": 95})
    )
    client = make_client(recorder, clock, recording_sleep)

    status = await client.get_conversation_status("c_123")

    assert status.conversation_id == "c_123"
    assert status.status is ConversationStatusKind.ENDED
    assert status.participants == 2
    assert status.duration == 95
    assert not status.keeps_polling
    assert str(recorder.requests[0].url) == f"{BASE_URL}/conversations/c_123"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, json={"status": "paused"}),
        httpx.Response(200, text="not json"),
        httpx.ConnectError("down"),
    ],
)
async def test_status_failures_mean_unknown(clock, recording_sleep, reply):
    recorder = Recorder(reply)
    client = make_client(recorder, clock, recording_sleep)

    assert await client.get_conversation_status("c_123") is None
    assert len(recorder.requests) == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_end_with_empty_body(clock, recording_sleep):
    recorder = Recorder(httpx.Response(204))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.end_conversation("c_123")

    assert result.success
    assert result.failure is None
    assert recorder.requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_end_with_zero_length_body(clock, recording_sleep):
    recorder = Recorder(httpx.Response(200, headers={"content-length": "0"}))
    client = make_client(recorder, clock, recording_sleep)

    assert (await client.end_conversation("c_123")).success


@pytest.mark.asyncio
async def test_end_unknown_conversation(clock, recording_sleep):
    recorder = Recorder(httpx.Response(404, json={"message": "Conversation not found"}))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.end_conversation("c_404")

    assert isinstance(result.failure, NotFoundError)
    assert result.failure.code == "conversation_not_found"
    assert result.error == "Conversation not found"


@pytest.mark.asyncio
async def test_end_with_plain_text_error(clock, recording_sleep):
    recorder = Recorder(httpx.Response(409, text="already ended"))
    client = make_client(recorder, clock, recording_sleep)

    result = await client.end_conversation("c_123")

    assert result.error == "already ended"


def test_usage_updates_recompute_remaining(clock, recording_sleep):
    client = make_client(Recorder(created()), clock, recording_sleep, minutes=100)

    usage = client.update_conversation_usage(total_minutes_used=40, current_month_usage=3)

    assert usage.remaining_minutes == 60
    assert usage.current_month_usage == 3
    assert client.get_conversation_usage() == usage
    assert client.masked_api_key != "tavus_test123"


def test_provider_client_requires_auth_headers(clock):
    class HeaderlessClient(ProviderHttpClient):
        provider = "example"

    with pytest.raises(TypeError):
        HeaderlessClient(
            api_key="key",
            base_url=BASE_URL,
            policy=RetryPolicy(timeout=5.0, max_retries=0, base_delay=1.0),
            limiter=RollingHourlyRateLimiter(5, clock=clock),
        )
