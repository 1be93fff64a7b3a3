"""Anthropic Messages API adapter.

Speaks ``POST {base}/v1/messages`` for both plain and streaming chat.
Authentication uses ``x-api-key`` together with the pinned
``anthropic-version`` header. Embeddings, images and video are not offered
by this vendor and raise ``ErrorCode.UNSUPPORTED``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx

from ..base.adapter import ProviderAdapter
from ..base.constants import ANTHROPIC_API_VERSION
from ..base.http.client import expect_object
from ..base.models import ChatRequest, ChatResponse
from .helpers import build_messages_body, parse_messages_response
from .stream_helpers import AnthropicStreamMapper

__all__ = ["AnthropicAdapter"]


class AnthropicAdapter(ProviderAdapter):
    provider_kind = "anthropic"
    supports_streaming = True

    def auth_headers(self) -> Dict[str, str]:
        headers = {"anthropic-version": ANTHROPIC_API_VERSION}
        if self.target.credential:
            headers["x-api-key"] = self.target.credential
        return headers

    def chat_url(self) -> str:
        return self.target.url("v1/messages")

    async def _fetch_image(self, url: str) -> Tuple[bytes, Optional[str]]:
        response = await self.get_bytes(url, ctx=self.log_context("image_fetch"), authenticated=False)
        content_type = response.headers.get("content-type")
        mime = content_type.split(";")[0].strip() if content_type else None
        return response.content, mime or None

    async def build_chat_body(self, request: ChatRequest, *, stream: bool = False) -> Dict[str, Any]:
        return await build_messages_body(
            self.target.model, request, fetch_image=self._fetch_image, stream=stream
        )

    def parse_chat(self, payload: Any, response: httpx.Response) -> ChatResponse:
        obj = expect_object(payload, provider=self.target.provider, model=self.target.model)
        return parse_messages_response(obj)

    def stream_mapper(self) -> AnthropicStreamMapper:
        return AnthropicStreamMapper(self.target.provider, self.target.model)
