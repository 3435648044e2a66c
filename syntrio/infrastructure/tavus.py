# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Avatar conversation provider client."""

from __future__ import annotations

from dataclasses import asdict, replace
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from syntrio.application.dto.conversations import ConversationPayloadDTO
from syntrio.domain.conversations import (
    ConversationRequest,
    ConversationResult,
    ConversationStatus,
    ConversationStatusKind,
    ConversationUsage,
    format_conversational_context,
    generate_context_aware_greeting,
)
from syntrio.domain.results import OperationResult
from syntrio.infrastructure.http import ProviderHttpClient, ProviderMessages, is_empty_response, parse_error_body
from syntrio.shared.errors import (
    AppError,
    NotFoundError,
    QuotaExhaustedError,
    ReplicaNotFoundError,
    TransientNetworkError,
    ValidationError,
    first_error_message,
    format_pydantic_errors,
)
from syntrio.shared.logging import logger

TAVUS_MESSAGES = ProviderMessages(
    display_name="Tavus",
    unavailable="Tavus service is temporarily unavailable. Please try again later.",
    timeout="Conversation request timed out. Please try again.",
    network="Unable to connect to conversation service. Please check your internet connection.",
    failure="Conversation request failed",
    invalid_response="Invalid response format from conversation service",
)


class TavusConversationClient(ProviderHttpClient):
    """Creates, inspects and ends avatar conversations.

    Public operations never raise for provider or validation problems: they
    return a result with ``failure`` set, or ``None`` for status lookups.
    """

    provider = "tavus"
    messages = TAVUS_MESSAGES

    def __init__(self, *, minutes_available: int = 250, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._usage = ConversationUsage(
            total_minutes_available=minutes_available,
            remaining_minutes=minutes_available,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _map_status(self, status: int, message: str) -> AppError:
        if status == 402:
            return QuotaExhaustedError(
                "Insufficient credits or conversation minutes. Please check your Tavus account."
            )
        if status == 404:
            return ReplicaNotFoundError()
        return super()._map_status(status, message)

    @staticmethod
    def build_payload(request: ConversationRequest) -> dict[str, Any]:
        context = request.conversational_context
        greeting = generate_context_aware_greeting(context) if context else request.custom_greeting

        payload: dict[str, Any] = {
            "replica_id": request.replica_id.strip(),
            "conversation_name": request.conversation_name.strip(),
            "custom_greeting": greeting.strip(),
            "properties": request.properties.to_payload(),
        }
        formatted = format_conversational_context(context) if context else ""
        if formatted:
            payload["conversational_context"] = formatted
        return payload

    async def create_conversation(self, request: ConversationRequest) -> ConversationResult:
        try:
            ConversationPayloadDTO(
                replica_id=request.replica_id,
                conversation_name=request.conversation_name,
                custom_greeting=request.custom_greeting,
                conversational_context=request.conversational_context,
            )
        except PydanticValidationError as exc:
            message = first_error_message(exc)
            logger.info(f"tavus: request rejected reason={message}")
            return ConversationResult(
                success=False,
                failure=ValidationError(message, context=format_pydantic_errors(exc)),
            )

        if self._usage.remaining_minutes <= 0:
            return ConversationResult(
                success=False,
                failure=QuotaExhaustedError(
                    "No conversation minutes remaining. Please check your Tavus account."
                ),
            )

        payload = self.build_payload(request)
        logger.info(
            f"tavus: creating conversation replica_id={payload['replica_id']} "
            f"has_context={'conversational_context' in payload}"
        )

        try:
            response = await self._request("POST", "/conversations", payload=payload)
            data = self._json_body(response)
        except AppError as exc:
            logger.warning(f"tavus: create failed code={exc.code} message={exc.message}")
            return ConversationResult(success=False, failure=exc)

        self._usage = replace(self._usage, current_month_usage=self._usage.current_month_usage + 1)

        status = _parse_status(data.get("status")) or ConversationStatusKind.CREATING
        logger.info(f"tavus: conversation created conversation_id={data.get('conversation_id')} status={status}")
        return ConversationResult(
            success=True,
            conversation_id=data.get("conversation_id"),
            conversation_url=data.get("conversation_url"),
            status=status,
            expires_at=data.get("expires_at"),
        )

    async def get_conversation_status(self, conversation_id: str) -> ConversationStatus | None:
        """Single lookup; ``None`` means unknown, keep polling."""

        try:
            response = await self._request("GET", f"/conversations/{conversation_id}", retry=False)
            data = self._json_body(response)
        except AppError as exc:
            logger.warning(f"tavus: status check failed conversation_id={conversation_id} code={exc.code}")
            return None

        status = _parse_status(data.get("status"))
        if status is None:
            logger.warning(f"tavus: unknown status conversation_id={conversation_id} value={data.get('status')}")
            return None

        return ConversationStatus(
            conversation_id=conversation_id,
            status=status,
            conversation_url=data.get("conversation_url"),
            participants=int(data.get("participants") or 0),
            duration=int(data.get("duration") or 0),
            error=data.get("error"),
            expires_at=data.get("expires_at"),
        )

    async def end_conversation(self, conversation_id: str) -> OperationResult:
        try:
            self._ensure_api_key()
            response = await self._http.request(
                "DELETE",
                f"{self._base_url}/conversations/{conversation_id}",
                headers=self._headers(),
                timeout=self._policy.timeout,
            )
        except AppError as exc:
            return OperationResult(success=False, failure=exc)
        except httpx.TimeoutException:
            return OperationResult(success=False, failure=TransientNetworkError(self.messages.timeout))
        except httpx.TransportError:
            return OperationResult(success=False, failure=TransientNetworkError(self.messages.network))

        if not response.is_success:
            message = _end_error_message(response)
            logger.warning(f"tavus: end failed conversation_id={conversation_id} status={response.status_code}")
            return OperationResult(success=False, failure=self._map_end_status(response.status_code, message))

        # Empty bodies (204 or zero length) are never parsed
        logger.info(
            f"tavus: conversation ended conversation_id={conversation_id} "
            f"empty={is_empty_response(response)}"
        )
        return OperationResult(success=True)

    def _map_end_status(self, status: int, message: str) -> AppError:
        if status == 404:
            return NotFoundError(message, code="conversation_not_found")
        return self._map_status(status, message)

    def get_conversation_usage(self) -> ConversationUsage:
        return self._usage

    def update_conversation_usage(self, **changes: int) -> ConversationUsage:
        merged = {**asdict(self._usage), **changes}
        merged["remaining_minutes"] = merged["total_minutes_available"] - merged["total_minutes_used"]
        self._usage = ConversationUsage(**merged)
        return self._usage


def _parse_status(value: Any) -> ConversationStatusKind | None:
    if not value:
        return None
    try:
        return ConversationStatusKind(str(value))
    except ValueError:
        return None


def _end_error_message(response: httpx.Response) -> str:
    fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = response.json()
        except ValueError:
            return fallback
        if isinstance(data, dict):
            return str(data.get("error") or data.get("message") or "Failed to end conversation")
        return fallback
    return parse_error_body(response, fallback)


__all__ = ["TAVUS_MESSAGES", "TavusConversationClient"]
