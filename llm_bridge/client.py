"""High-level async client.

``LLMClient`` is the caller-facing entry point: it resolves each request's
``provider/model`` string through the model router, picks the adapter for the
resolved provider kind and forwards the normalized request. One
``httpx.AsyncClient`` (and therefore one connection pool) is shared by every
call made through the same ``LLMClient``; the client is safe to use from many
concurrent tasks on the same event loop.

Example usage:
    async with LLMClient() as llm:
        reply = await llm.completion(
            ChatRequest(model="anthropic/claude-sonnet-4-5", messages=[Message("user", "hi")])
        )
        stream = await llm.stream_completion(request)
        async with stream:
            async for chunk in stream:
                print(chunk.content, end="")
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from .base.adapter import ProviderAdapter
from .base.constants import MAX_SSE_BUFFER_SIZE
from .base.dto import ChatRequestDTO, ProviderConfig, RouterConfig
from .base.factory import AdapterFactory
from .base.http import create_async_client
from .base.models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ImageRequest,
    ImageResponse,
    ProviderTarget,
    VideoRequest,
    VideoResponse,
)
from .base.resilience.retry import DEFAULT_RETRY_POLICY, RetryPolicy
from .base.routing import ModelRouter
from .base.streaming import ChatStream
from .base.timeouts import TimeoutConfig

Sleep = Callable[[float], Awaitable[Any]]


class LLMClient:
    """Normalized chat, embeddings, image and video calls across providers.

    Parameters:
        config: Provider table and default provider; built-ins apply when absent.
        http_client: Optional externally owned ``httpx.AsyncClient``. When
            given, :meth:`aclose` leaves it open.
        retry_policy: Retry budget for every HTTP request.
        sleep: Awaitable used for retry and poll waits.
        max_sse_buffer_size: Per-stream SSE memory ceiling in bytes.
        timeout_config: Explicit timeouts; environment-derived when omitted.
    """

    def __init__(
        self,
        config: Optional[RouterConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        sleep: Sleep = asyncio.sleep,
        max_sse_buffer_size: int = MAX_SSE_BUFFER_SIZE,
        timeout_config: Optional[TimeoutConfig] = None,
    ) -> None:
        self._router = ModelRouter(config)
        self._owns_client = http_client is None
        self._http = http_client or create_async_client(timeout_config=timeout_config)
        self._retry_policy = retry_policy
        self._sleep = sleep
        self._max_sse_buffer_size = max_sse_buffer_size
        self._timeout_config = timeout_config

    @property
    def config(self) -> RouterConfig:
        return self._router.config

    def _derive(self, config: RouterConfig) -> "LLMClient":
        """Share the connection pool; the derived client never closes it."""
        return LLMClient(
            config,
            http_client=self._http,
            retry_policy=self._retry_policy,
            sleep=self._sleep,
            max_sse_buffer_size=self._max_sse_buffer_size,
            timeout_config=self._timeout_config,
        )

    def with_provider(self, name: str, config: ProviderConfig) -> "LLMClient":
        return self._derive(self.config.with_provider(name, config))

    def with_default_provider(self, name: str) -> "LLMClient":
        return self._derive(self.config.with_default_provider(name))

    # ---- dispatch ----------------------------------------------------------

    def resolve(self, model: str, provider_config: Optional[ProviderConfig] = None) -> ProviderTarget:
        return self._router.resolve(model, provider_config)

    def _adapter(self, target: ProviderTarget) -> ProviderAdapter:
        return AdapterFactory.create(
            target,
            self._http,
            retry_policy=self._retry_policy,
            sleep=self._sleep,
            max_sse_buffer_size=self._max_sse_buffer_size,
            timeout_config=self._timeout_config,
        )

    def _prepare(self, request: Any, provider_config: Optional[ProviderConfig]):
        target = self.resolve(request.model, provider_config)
        return self._adapter(target), replace(request, model=target.model)

    @staticmethod
    def _chat_request(request: Union[ChatRequest, ChatRequestDTO]) -> ChatRequest:
        return request.to_request() if isinstance(request, ChatRequestDTO) else request

    # ---- operations --------------------------------------------------------

    async def completion(
        self,
        request: Union[ChatRequest, ChatRequestDTO],
        *,
        provider_config: Optional[ProviderConfig] = None,
    ) -> ChatResponse:
        adapter, req = self._prepare(self._chat_request(request), provider_config)
        return await adapter.chat(req)

    async def stream_completion(
        self,
        request: Union[ChatRequest, ChatRequestDTO],
        *,
        provider_config: Optional[ProviderConfig] = None,
    ) -> ChatStream:
        """Open a chat stream; iterate it (or ``collect()``) to read chunks."""
        adapter, req = self._prepare(self._chat_request(request), provider_config)
        return await adapter.chat_stream(req)

    async def embedding(
        self, request: EmbeddingRequest, *, provider_config: Optional[ProviderConfig] = None
    ) -> EmbeddingResponse:
        adapter, req = self._prepare(request, provider_config)
        return await adapter.embed(req)

    async def image_generation(
        self, request: ImageRequest, *, provider_config: Optional[ProviderConfig] = None
    ) -> ImageResponse:
        adapter, req = self._prepare(request, provider_config)
        return await adapter.image_generate(req)

    async def video_generation(
        self, request: VideoRequest, *, provider_config: Optional[ProviderConfig] = None
    ) -> VideoResponse:
        adapter, req = self._prepare(request, provider_config)
        return await adapter.video_generate(req)

    # ---- lifecycle ---------------------------------------------------------

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "LLMClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["LLMClient"]
