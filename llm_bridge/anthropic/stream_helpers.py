"""Anthropic streaming helpers.

Purpose:
- Map Messages API SSE events onto normalized stream chunks. The event type
  comes from the SSE ``event:`` field, falling back to the payload's
  ``type`` when a proxy strips event names.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ChatStreamChunk
from ..base.streaming import END_OF_STREAM, MapResult, SseEvent, StreamMapper
from ..base.tokens import extract_anthropic_usage


class AnthropicStreamMapper(StreamMapper):
    """Per-stream mapper accumulating usage across ``message_start``/``message_delta``."""

    def __call__(self, event: SseEvent) -> MapResult:
        payload = self.parse_json(event.data)
        if not isinstance(payload, Mapping):
            raise ProviderError(
                code=ErrorCode.PARSE,
                message="stream event is not a JSON object",
                provider=self.provider,
                model=self.model,
            )
        kind = event.event_name or payload.get("type")

        if kind == "content_block_delta":
            delta = payload.get("delta")
            text = delta.get("text") if isinstance(delta, Mapping) else None
            if not isinstance(text, str):
                # tool input_json deltas carry no text
                return None
            return ChatStreamChunk(content=text, raw=payload)
        if kind == "message_start":
            message = payload.get("message")
            if isinstance(message, Mapping):
                if isinstance(message.get("id"), str):
                    self.response_id = message["id"]
                self._usage_from(message.get("usage"))
            return None
        if kind == "message_delta":
            self._usage_from(payload.get("usage"))
            return None
        if kind == "message_stop":
            return END_OF_STREAM
        if kind == "error":
            error = payload.get("error")
            message = error.get("message") if isinstance(error, Mapping) else None
            raise ProviderError(
                code=ErrorCode.HTTP,
                message=str(message or error or "anthropic stream error"),
                provider=self.provider,
                model=self.model,
            )
        return None

    def _usage_from(self, raw: Any) -> None:
        if isinstance(raw, Mapping):
            self.record_usage(extract_anthropic_usage(raw))


__all__ = ["AnthropicStreamMapper"]
