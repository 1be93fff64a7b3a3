"""Shared provider adapter base.

Purpose:
- Hold the control flow every vendor adapter shares: header layering,
  retry-wrapped JSON requests, chat start/end/error logging, and stream
  opening. Vendor subclasses only translate bodies and responses.

External dependencies:
- ``httpx`` (shared ``AsyncClient`` injected by the caller).

Fallback semantics:
- None. Operations a vendor does not implement raise ``ErrorCode.UNSUPPORTED``;
  every failure propagates to the caller as a ``ProviderError``.

Timeout strategy:
- Timeouts are configured once on the shared client (see
  :mod:`llm_bridge.base.timeouts`); streaming requests use the longer idle
  read timeout.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple

import httpx

from .constants import MAX_SSE_BUFFER_SIZE
from .errors import ErrorCode, ProviderError
from .http.client import merge_headers
from .logging import LogContext, get_logger, normalized_log_event
from .models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ImageRequest,
    ImageResponse,
    ProviderMetadata,
    ProviderTarget,
    VideoRequest,
    VideoResponse,
)
from .resilience.retry import DEFAULT_RETRY_POLICY, RetryPolicy, Stopwatch, request_json, send_with_retry
from .streaming import ChatStream, StreamMapper
from .timeouts import TimeoutConfig, build_httpx_timeout
from .tokens import usage_log_tokens

Sleep = Callable[[float], Awaitable[Any]]


class ProviderAdapter:
    """Base class for vendor adapters bound to one resolved target.

    An adapter instance lives for a single logical call: it is created by the
    client after routing and discarded with the call.
    """

    provider_kind: str = "-"
    supports_streaming: bool = False

    def __init__(
        self,
        target: ProviderTarget,
        client: httpx.AsyncClient,
        *,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        sleep: Sleep = asyncio.sleep,
        max_sse_buffer_size: int = MAX_SSE_BUFFER_SIZE,
        timeout_config: Optional[TimeoutConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.target = target
        self.client = client
        self.retry_policy = retry_policy
        self.sleep = sleep
        self.max_sse_buffer_size = max_sse_buffer_size
        self.timeout_config = timeout_config
        self._logger = logger or get_logger(f"llm_bridge.{self.provider_kind}")

    # ---- context & headers -------------------------------------------------

    def log_context(self, operation: str) -> LogContext:
        return LogContext(provider=self.target.provider, model=self.target.model, operation=operation)

    def auth_headers(self) -> Dict[str, str]:
        """Vendor authentication headers (empty when no credential)."""
        return {}

    def headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Auth headers, then ``extra``, then the target's consumer headers."""
        headers = merge_headers(self.auth_headers(), extra)
        return merge_headers(headers, self.target.extra_headers)

    def error(self, code: ErrorCode, message: str, **kwargs: Any) -> ProviderError:
        return ProviderError(
            code=code,
            message=message,
            provider=self.target.provider,
            model=self.target.model,
            **kwargs,
        )

    def _attribute(self, exc: ProviderError) -> ProviderError:
        """Fill provider/model on errors raised by pure translation helpers."""
        if exc.provider == "-":
            exc.provider = self.target.provider
        if exc.model is None:
            exc.model = self.target.model
        return exc

    def unsupported(self, operation: str) -> ProviderError:
        return self.error(
            ErrorCode.UNSUPPORTED,
            f"{operation} is not supported for {self.provider_kind} providers",
        )

    # ---- request helpers ---------------------------------------------------

    async def post_json(
        self,
        url: str,
        body: Mapping[str, Any],
        *,
        ctx: LogContext,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Tuple[Any, httpx.Response]:
        """POST ``body`` as JSON through the retry controller and decode once."""
        hdrs = self.headers(headers)
        return await request_json(
            self.client,
            lambda: self.client.build_request("POST", url, json=body, headers=hdrs),
            self.retry_policy,
            ctx=ctx,
            sleep=self.sleep,
        )

    async def get_json(self, url: str, *, ctx: LogContext) -> Tuple[Any, httpx.Response]:
        hdrs = self.headers()
        return await request_json(
            self.client,
            lambda: self.client.build_request("GET", url, headers=hdrs),
            self.retry_policy,
            ctx=ctx,
            sleep=self.sleep,
        )

    async def get_bytes(
        self,
        url: str,
        *,
        ctx: LogContext,
        headers: Optional[Mapping[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """GET ``url`` and read the full body.

        ``authenticated=False`` is for third-party URLs (e.g. user images):
        vendor credentials and consumer headers are not sent.
        """
        hdrs = self.headers(headers) if authenticated else merge_headers({}, headers)
        response = await send_with_retry(
            self.client,
            lambda: self.client.build_request("GET", url, headers=hdrs),
            self.retry_policy,
            ctx=ctx,
            sleep=self.sleep,
        )
        await response.aread()
        return response

    # ---- chat --------------------------------------------------------------

    def chat_url(self) -> str:
        raise NotImplementedError

    def stream_url(self) -> str:
        return self.chat_url()

    async def build_chat_body(self, request: ChatRequest, *, stream: bool = False) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_chat(self, payload: Any, response: httpx.Response) -> ChatResponse:
        raise NotImplementedError

    def stream_mapper(self) -> StreamMapper:
        raise self.unsupported("chat_stream")

    def stream_headers(self) -> Dict[str, str]:
        return {"accept": "text/event-stream"}

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Non-streaming chat: build body, send with retries, normalize."""
        ctx = self.log_context("chat")
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            has_tools=bool(request.tools),
            has_schema=bool(request.response_format),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        watch = Stopwatch()
        try:
            body = await self.build_chat_body(request)
            payload, response = await self.post_json(self.chat_url(), body, ctx=ctx)
            result = self.parse_chat(payload, response)
        except ProviderError as exc:
            self._attribute(exc)
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                error_code=exc.code.value,
                level=logging.WARNING,
                status_code=exc.status_code,
                error=exc.message,
            )
            raise
        latency_ms = watch.elapsed_ms()
        result.meta = ProviderMetadata(
            provider_name=self.target.provider,
            model_name=self.target.model,
            http_status=response.status_code,
            latency_ms=latency_ms,
        )
        ctx.response_id = result.response_id
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(result.content),
            tokens=usage_log_tokens(result.usage),
            latency_ms=latency_ms,
        )
        return result

    async def chat_stream(self, request: ChatRequest) -> ChatStream:
        """Open a streaming chat and return the chunk iterator.

        The handshake goes through the retry controller; once the 2xx
        response headers arrive, the body is handed to :class:`ChatStream`
        unread.
        """
        if not self.supports_streaming:
            raise self.unsupported("chat_stream")
        ctx = self.log_context("chat_stream")
        mapper = self.stream_mapper()
        try:
            body = await self.build_chat_body(request, stream=True)
        except ProviderError as exc:
            self._attribute(exc)
            raise
        hdrs = self.headers(self.stream_headers())
        url = self.stream_url()
        timeout = build_httpx_timeout(self.timeout_config, streaming=True)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start")
        response = await send_with_retry(
            self.client,
            lambda: self.client.build_request("POST", url, json=body, headers=hdrs, timeout=timeout),
            self.retry_policy,
            ctx=ctx,
            stream=True,
            sleep=self.sleep,
        )
        return ChatStream(
            response,
            mapper,
            ctx=ctx,
            logger=self._logger,
            max_buffer_size=self.max_sse_buffer_size,
        )

    # ---- other operations --------------------------------------------------

    async def embed(self, request: EmbeddingRequest) -> EmbeddingResponse:
        raise self.unsupported("embeddings")

    async def image_generate(self, request: ImageRequest) -> ImageResponse:
        raise self.unsupported("image generation")

    async def video_generate(self, request: VideoRequest) -> VideoResponse:
        raise self.unsupported("video generation")


__all__ = ["ProviderAdapter"]
