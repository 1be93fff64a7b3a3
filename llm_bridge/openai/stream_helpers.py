"""Streaming helpers for OpenAI-compatible providers.

``OpenAIStreamMapper`` maps chat-completion SSE events: the literal
``[DONE]`` payload ends the stream; every other event yields one chunk with
``choices[0].delta.content`` (empty when absent) and the usage object some
gateways attach to the final event.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..base.constants import SSE_DONE_SENTINEL
from ..base.errors import ErrorCode, ProviderError
from ..base.models import ChatStreamChunk
from ..base.streaming import END_OF_STREAM, MapResult, SseEvent, StreamMapper
from ..base.tokens import extract_openai_usage


def _delta_text(payload: Mapping[str, Any]) -> str:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], Mapping):
        return ""
    delta = choices[0].get("delta")
    if not isinstance(delta, Mapping):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""


class OpenAIStreamMapper(StreamMapper):
    def __call__(self, event: SseEvent) -> MapResult:
        data = event.data.strip()
        if data == SSE_DONE_SENTINEL:
            return END_OF_STREAM
        payload = self.parse_json(data)
        if not isinstance(payload, Mapping):
            raise ProviderError(
                code=ErrorCode.PARSE,
                message="stream event is not a JSON object",
                provider=self.provider,
                model=self.model,
            )
        error = payload.get("error")
        if isinstance(error, Mapping):
            # gateways report mid-stream failures as a data event
            raise ProviderError(
                code=ErrorCode.HTTP,
                message=str(error.get("message") or error),
                provider=self.provider,
                model=self.model,
                status_code=error.get("code") if isinstance(error.get("code"), int) else None,
            )
        if self.response_id is None and isinstance(payload.get("id"), str):
            self.response_id = payload["id"]
        usage = None
        if isinstance(payload.get("usage"), Mapping):
            usage = extract_openai_usage(payload["usage"])
            self.record_usage(usage)
        return ChatStreamChunk(content=_delta_text(payload), usage=usage, raw=payload)


__all__ = ["OpenAIStreamMapper"]
