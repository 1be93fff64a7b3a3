"""Streaming chat primitives.

:class:`ChatStream` is the async iterator handed to callers of
``chat_stream``. It owns the open ``httpx.Response`` and drives
decode → map → yield one network read at a time. Chunks are produced in the
order their SSE events arrived. The response is closed when the stream ends,
fails, is closed explicitly, or the consuming task is cancelled.

Decode and mapping failures are raised from ``__anext__`` as the final item;
chunks already yielded stay valid.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, List, Optional

import httpx

from ..constants import MAX_SSE_BUFFER_SIZE
from ..errors import ErrorCode, ProviderError, classify_exception
from ..logging import LogContext
from ..models_parts.chat_response import ChatResponse
from ..models_parts.provider_metadata import ProviderMetadata
from ..models_parts.stream_chunk import ChatStreamChunk
from ..models_parts.usage import Usage
from .mapper import END_OF_STREAM, StreamMapper
from .sse import iter_sse_events
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics


class ChatStream:
    """Async iterator of :class:`ChatStreamChunk` bound to one connection.

    Example::

        async with await client.stream_completion(request) as stream:
            async for chunk in stream:
                print(chunk.content, end="")
        print(stream.usage)
    """

    def __init__(
        self,
        response: httpx.Response,
        mapper: StreamMapper,
        *,
        ctx: LogContext,
        logger: logging.Logger,
        max_buffer_size: int = MAX_SSE_BUFFER_SIZE,
    ) -> None:
        self._response = response
        self._mapper = mapper
        self._ctx = ctx
        self._logger = logger
        self._max_buffer_size = max_buffer_size
        self.metrics = StreamMetrics()
        self._chunks = self._run()

    @property
    def usage(self) -> Usage:
        """Usage accumulated from the events seen so far."""
        return self._mapper.usage

    @property
    def response_id(self) -> Optional[str]:
        return self._mapper.response_id

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> ChatStreamChunk:
        return await self._chunks.__anext__()

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop consuming and release the connection."""
        await self._chunks.aclose()
        await self._response.aclose()

    async def _bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            raise ProviderError(
                code=ErrorCode.HTTP,
                message=f"stream interrupted: {str(exc) or exc.__class__.__name__}",
                provider=self._mapper.provider,
                model=self._mapper.model,
                raw=exc,
            ) from exc

    async def _run(self) -> AsyncIterator[ChatStreamChunk]:
        error_code: Optional[str] = None
        error: Optional[str] = None
        try:
            events = iter_sse_events(
                self._bytes(),
                max_buffer_size=self._max_buffer_size,
                provider=self._mapper.provider,
                model=self._mapper.model,
            )
            async for event in events:
                result = self._mapper(event)
                if result is END_OF_STREAM:
                    break
                if result is None:
                    continue
                self.metrics.record_chunk(bool(result.content))
                yield result
        except asyncio.CancelledError:
            error_code, error = "cancelled", "stream cancelled"
            raise
        except Exception as exc:
            error_code, error = classify_exception(exc).value, str(exc)
            raise
        finally:
            await self._response.aclose()
            finalize_stream(
                logger=self._logger,
                ctx=self._ctx,
                metrics=self.metrics,
                usage=self._mapper.usage,
                error_code=error_code,
                error=error,
            )

    async def collect(self) -> ChatResponse:
        """Drain the stream into a single :class:`ChatResponse`."""
        parts: List[str] = []
        async with self:
            async for chunk in self:
                parts.append(chunk.content)
        meta = ProviderMetadata(
            provider_name=self._mapper.provider,
            model_name=self._mapper.model or "-",
            http_status=self._response.status_code,
            latency_ms=self.metrics.total_duration_ms,
            extra={"stream_events": self.metrics.emitted},
        )
        return ChatResponse(
            content="".join(parts),
            usage=self._mapper.usage,
            response_id=self._mapper.response_id,
            meta=meta,
        )


__all__ = ["ChatStream"]
