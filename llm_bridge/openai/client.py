"""OpenAI-compatible provider adapter.

Serves every vendor speaking the OpenAI REST dialect (OpenAI, OpenRouter,
xAI, self-hosted gateways): chat completions with optional SSE streaming,
embeddings, image generation and the video job flow. Authentication is a
bearer token, sent only when the resolved target carries a credential.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx

from ..base.adapter import ProviderAdapter
from ..base.http.client import expect_object
from ..base.models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ImageRequest,
    ImageResponse,
    VideoRequest,
    VideoResponse,
)
from ..base.tokens import extract_openai_usage
from .chat_helpers import (
    build_chat_body,
    build_embedding_body,
    build_image_body,
    parse_chat_response,
    parse_embedding_vectors,
    parse_image_usage,
    parse_images,
)
from .stream_helpers import OpenAIStreamMapper
from .video import generate_video

__all__ = ["OpenAICompatAdapter"]


class OpenAICompatAdapter(ProviderAdapter):
    provider_kind = "openai_compatible"
    supports_streaming = True

    def auth_headers(self) -> Dict[str, str]:
        if self.target.credential:
            return {"authorization": f"Bearer {self.target.credential}"}
        return {}

    def chat_url(self) -> str:
        return self.target.url("chat/completions")

    async def build_chat_body(self, request: ChatRequest, *, stream: bool = False) -> Dict[str, Any]:
        return build_chat_body(self.target.model, request, stream=stream)

    def parse_chat(self, payload: Any, response: httpx.Response) -> ChatResponse:
        obj = expect_object(payload, provider=self.target.provider, model=self.target.model)
        return parse_chat_response(obj, response)

    def stream_mapper(self) -> OpenAIStreamMapper:
        return OpenAIStreamMapper(self.target.provider, self.target.model)

    async def embed(self, request: EmbeddingRequest) -> EmbeddingResponse:
        ctx = self.log_context("embeddings")
        payload, _ = await self.post_json(
            self.target.url("embeddings"), build_embedding_body(self.target.model, request), ctx=ctx
        )
        obj = expect_object(payload, provider=self.target.provider, model=self.target.model)
        return EmbeddingResponse(
            vectors=parse_embedding_vectors(obj, provider=self.target.provider, model=self.target.model),
            usage=extract_openai_usage(obj.get("usage") or {}),
            raw=obj,
        )

    async def image_generate(self, request: ImageRequest) -> ImageResponse:
        ctx = self.log_context("images")
        payload, _ = await self.post_json(
            self.target.url("images/generations"), build_image_body(self.target.model, request), ctx=ctx
        )
        obj = expect_object(payload, provider=self.target.provider, model=self.target.model)
        return ImageResponse(images=parse_images(obj), usage=parse_image_usage(obj), raw=obj)

    async def video_generate(self, request: VideoRequest) -> VideoResponse:
        return await generate_video(self, request)
