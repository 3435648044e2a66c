from __future__ import annotations

import json

import httpx
import pytest

from syntrio.domain.translations import TranslationRequest
from syntrio.infrastructure.lingo import LingoTranslationClient
from syntrio.infrastructure.rate_limit import RollingHourlyRateLimiter
from syntrio.infrastructure.resilience import RetryPolicy
from syntrio.shared.errors import InvalidApiKeyError, ProtocolError, TransientNetworkError, ValidationError

BASE_URL = "https://lingo.test/v1"


class CountingHandler:
    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]


def make_client(handler, clock, sleep, *, limit=100):
    return LingoTranslationClient(
        api_key="api_abcdef123456",
        base_url=BASE_URL,
        policy=RetryPolicy(timeout=5.0, max_retries=3, base_delay=2.0),
        limiter=RollingHourlyRateLimiter(limit, clock=clock),
        http=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=sleep,
    )


@pytest.mark.asyncio
async def test_translate_posts_and_returns_text(clock, recording_sleep):
    handler = CountingHandler(
        httpx.Response(200, json={"translated_text": "Hola mundo", "detected_language": "en"})
    )
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(TranslationRequest(text="Hello world", target_language="es"))

    assert result.success
    assert result.translated_text == "Hola mundo"
    assert result.detected_language == "en"

    sent = handler.requests[0]
    assert str(sent.url) == f"{BASE_URL}/translate"
    assert sent.headers["authorization"] == "Bearer api_abcdef123456"
    assert json.loads(sent.content) == {"text": "Hello world", "target_language": "es"}


@pytest.mark.asyncio
async def test_source_language_is_sent_when_given(clock, recording_sleep):
    handler = CountingHandler(httpx.Response(200, json={"translated_text": "Bonjour"}))
    client = make_client(handler, clock, recording_sleep)

    await client.translate_text(TranslationRequest(text="Hello", target_language="fr", source_language="en"))

    assert json.loads(handler.requests[0].content)["source_language"] == "en"


@pytest.mark.asyncio
async def test_same_language_short_circuits(clock, recording_sleep):
    handler = CountingHandler(httpx.Response(500))
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(
        TranslationRequest(text="Hello world", target_language="en", source_language="en")
    )

    assert result.success
    assert result.translated_text == "Hello world"
    assert result.detected_language == "en"
    assert handler.requests == []
    assert client.get_usage_stats().request_count == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("text", "target", "source", "message"),
    [
        ("   ", "es", None, "Text content is required for translation"),
        ("x" * 1001, "es", None, "Text content exceeds maximum length of 1000 characters"),
        ("Hello", "", None, "Target language is required"),
        ("Hello", "xx", None, "Unsupported target language"),
        ("Hello", "es", "tlh", "Unsupported source language"),
    ],
)
async def test_validation_failures(clock, recording_sleep, text, target, source, message):
    handler = CountingHandler(httpx.Response(200, json={"translated_text": "unused"}))
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(
        TranslationRequest(text=text, target_language=target, source_language=source)
    )

    assert isinstance(result.failure, ValidationError)
    assert result.error == message
    assert handler.requests == []


@pytest.mark.asyncio
async def test_missing_translated_text_is_a_protocol_error(clock, recording_sleep):
    handler = CountingHandler(httpx.Response(200, json={"detected_language": "en"}))
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(TranslationRequest(text="Hello", target_language="de"))

    assert isinstance(result.failure, ProtocolError)
    assert result.error == "Invalid response format from translation service"
    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_server_errors_retry_then_succeed(clock, recording_sleep):
    handler = CountingHandler(
        httpx.Response(503, text="maintenance"),
        httpx.Response(200, json={"translated_text": "Ciao"}),
    )
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(TranslationRequest(text="Hello", target_language="it"))

    assert result.translated_text == "Ciao"
    assert recording_sleep.calls == [2.0]
    assert client.get_usage_stats().request_count == 2


@pytest.mark.asyncio
async def test_server_errors_exhaust_retries(clock, recording_sleep):
    handler = CountingHandler(httpx.Response(500, json={"error": "down"}))
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(TranslationRequest(text="Hello", target_language="ja"))

    assert isinstance(result.failure, TransientNetworkError)
    assert result.error == "Lingo.dev service is temporarily unavailable. Please try again later."
    assert len(handler.requests) == 4


@pytest.mark.asyncio
async def test_unauthorized_is_not_retried(clock, recording_sleep):
    handler = CountingHandler(httpx.Response(401, json={"error": "bad key"}))
    client = make_client(handler, clock, recording_sleep)

    result = await client.translate_text(TranslationRequest(text="Hello", target_language="ko"))

    assert isinstance(result.failure, InvalidApiKeyError)
    assert result.error == "Invalid API key. Please check your Lingo.dev API key."
    assert len(handler.requests) == 1


def test_supported_languages():
    languages = LingoTranslationClient.get_supported_languages()

    assert [lang.code for lang in languages] == ["en", "es", "fr", "de", "it", "pt", "ja", "ko", "zh", "ar"]
    assert LingoTranslationClient.get_language_by_code("pt").name == "Portuguese"
    assert LingoTranslationClient.get_language_by_code("xx") is None
