"""Vendor stream mapper contract.

A mapper turns one :class:`~llm_bridge.base.streaming.sse.SseEvent` into a
:class:`~llm_bridge.base.models.ChatStreamChunk`, ``None`` (event consumed
without output) or :data:`END_OF_STREAM`. Mappers are created per stream
and accumulate the usage and response id they observe.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Union

from ..errors import ErrorCode, ProviderError
from ..models_parts.stream_chunk import ChatStreamChunk
from ..models_parts.usage import Usage
from .sse import SseEvent


class _EndOfStream:
    _instance: Optional["_EndOfStream"] = None

    def __new__(cls) -> "_EndOfStream":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END_OF_STREAM"


END_OF_STREAM = _EndOfStream()

MapResult = Union[ChatStreamChunk, None, _EndOfStream]


class StreamMapper:
    """Base class for per-stream vendor mappers."""

    def __init__(self, provider: str = "-", model: Optional[str] = None) -> None:
        self.provider = provider
        self.model = model
        self.usage = Usage()
        self.response_id: Optional[str] = None

    def __call__(self, event: SseEvent) -> MapResult:
        raise NotImplementedError

    def record_usage(self, usage: Usage) -> None:
        self.usage = self.usage.merge(usage)

    def parse_json(self, data: str) -> Any:
        try:
            return json.loads(data)
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.PARSE,
                message=f"malformed stream event JSON: {exc}",
                provider=self.provider,
                model=self.model,
                raw=exc,
            ) from exc


__all__ = ["END_OF_STREAM", "MapResult", "StreamMapper"]
