import re

import pytest

from syntrio.domain.conversations import (
    DEFAULT_CONVERSATION_NAME,
    DEFAULT_GREETING,
    ConversationStatus,
    ConversationStatusKind,
    default_conversation_name,
    format_duration,
    generate_context_aware_greeting,
)
from syntrio.domain.sessions import Session, WorkInProgress
from syntrio.shared.config import AppConfig
from syntrio.shared.ids import generate_id, iso_timestamp
from syntrio.shared.logging import mask_api_key, sanitize_message


def test_session_validity_boundary() -> None:
    session = Session(
        user_id="user_1",
        email="ada@example.com",
        name="Ada",
        session_id="session_1",
        login_time=0.0,
        last_activity=0.0,
        expires_at=100.0,
        device_info="test",
    )
    assert session.is_valid(99.9) is True
    assert session.is_valid(100.0) is False
    assert session.remaining(150.0) == 0.0
    assert session.extended(40.0, 100.0).expires_at == 140.0
    assert session.touched(10.0).expires_at == 100.0


def test_work_in_progress_step_gates() -> None:
    blank = WorkInProgress()
    assert blank.is_meaningful() is False
    assert blank.can_proceed(1) is False
    assert blank.can_proceed(2) is True
    assert blank.can_proceed(3) is True

    topic = WorkInProgress(topic_text="Short one", selected_language="es")
    assert topic.is_meaningful() is True
    assert topic.can_proceed(1) is False
    assert topic.can_proceed(2) is False
    assert WorkInProgress(topic_text="Long enough topic").can_proceed(1) is True
    assert WorkInProgress(selected_language="es", bypass_translation=True).can_proceed(2) is True
    assert WorkInProgress(selected_avatar=None).can_proceed(3) is False


def test_work_in_progress_freshness() -> None:
    snapshot = WorkInProgress(topic_text="Topic").stamped(1000.0)
    assert snapshot.is_fresh(1000.0 + 10, 60) is True
    assert snapshot.is_fresh(1000.0 + 60, 60) is False
    assert WorkInProgress().is_fresh(0.0, 60) is False


def test_conversation_status_terminal_kinds() -> None:
    assert ConversationStatus("c", ConversationStatusKind.READY).keeps_polling is True
    assert ConversationStatus("c", ConversationStatusKind.ENDED).keeps_polling is False
    assert ConversationStatus("c", ConversationStatusKind.FAILED).keeps_polling is False


def test_conversation_naming_and_durations() -> None:
    assert default_conversation_name("   ") == DEFAULT_CONVERSATION_NAME
    assert default_conversation_name("one two three") == "one two three"
    long_name = default_conversation_name("extraordinarily verbose words describing nothing much at all here")
    assert long_name.endswith("...")
    assert len(long_name) == 40
    assert generate_context_aware_greeting(None) == DEFAULT_GREETING
    assert format_duration(45) == "45s"
    assert format_duration(125) == "2m 5s"
    assert format_duration(3725) == "1h 2m 5s"


def test_ids_and_timestamps() -> None:
    value = generate_id("user", 1_700_000_000.5)
    assert re.fullmatch(r"user_1700000000500_[a-z0-9]{9}", value)
    assert generate_id("user", 1.0) != generate_id("user", 1.0)
    assert iso_timestamp(0.5) == "1970-01-01T00:00:00.500Z"


def test_secrets_are_masked() -> None:
    assert mask_api_key("tavus_abcdefgh1234") == "tavu**********1234"
    assert mask_api_key("short") == "***"
    assert "abcdefgh1234" not in sanitize_message("key=tavus_abcdefgh1234")
    assert "hunter22" not in sanitize_message("password=hunter22")
    assert sanitize_message("mail ada@example.com") == "mail ***@example.com"


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SESSION_DURATION", "600")
    monkeypatch.setenv("DEBUG_LOGGING", "yes")
    config = AppConfig()

    assert config.session.duration == 600
    assert config.session.warning_window == 300
    assert config.debug_logging is True
    assert config.resilience.max_retries == 3
    assert config.is_production() is False
