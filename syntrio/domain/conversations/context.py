# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Deterministic text transforms applied before a conversation is created."""

from __future__ import annotations

DEFAULT_GREETING = "Hello! I'm your AI assistant. How can I help you today?"
DEFAULT_CONVERSATION_NAME = "Syntrio Interactive Session"


def format_conversational_context(user_input: str | None) -> str:
    if not user_input or not user_input.strip():
        return ""

    topic = user_input.strip()
    parts = [
        f"The user wants to discuss: {topic}",
        'Please engage directly with this topic without asking "how can I help you?"',
        "Start the conversation by acknowledging their interest in this subject "
        "and provide relevant insights or questions.",
    ]
    return " ".join(parts)


def generate_context_aware_greeting(user_input: str | None) -> str:
    if not user_input or not user_input.strip():
        return DEFAULT_GREETING

    first_sentence = user_input.strip().split(".")[0].strip()
    short_topic = first_sentence[:47] + "..." if len(first_sentence) > 50 else first_sentence

    return (
        f"Hello! I see you'd like to discuss {short_topic.lower()}. "
        "I'm excited to explore this topic with you and share insights that might be helpful. "
        "Let's dive right in!"
    )


def default_conversation_name(topic: str) -> str:
    words = " ".join(topic.strip().split()[:6])
    name = words[:37] + "..." if len(words) > 40 else words
    return name or DEFAULT_CONVERSATION_NAME


def format_duration(seconds: int) -> str:
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
