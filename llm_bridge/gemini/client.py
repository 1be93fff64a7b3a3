"""Gemini adapter for the Generative Language REST API.

Supports non-streaming ``generateContent`` chat and Veo video generation.
Streaming, embeddings and image generation raise ``ErrorCode.UNSUPPORTED``.
Authentication uses the ``x-goog-api-key`` header.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from ..base.adapter import ProviderAdapter
from ..base.http.client import expect_object
from ..base.logging import log_event
from ..base.models import ChatRequest, ChatResponse, VideoRequest, VideoResponse
from .helpers import build_generate_body, debug_enabled, parse_generate_response, strip_model_prefix
from .video import generate_video

__all__ = ["GeminiAdapter"]


class GeminiAdapter(ProviderAdapter):
    provider_kind = "gemini"
    supports_streaming = False

    def auth_headers(self) -> Dict[str, str]:
        if self.target.credential:
            return {"x-goog-api-key": self.target.credential}
        return {}

    def chat_url(self) -> str:
        return self.target.url(f"models/{strip_model_prefix(self.target.model)}:generateContent")

    async def _fetch_media(self, url: str) -> Tuple[bytes, Optional[str]]:
        response = await self.get_bytes(url, ctx=self.log_context("media_fetch"), authenticated=False)
        content_type = response.headers.get("content-type")
        mime = content_type.split(";")[0].strip() if content_type else None
        return response.content, mime or None

    async def build_chat_body(self, request: ChatRequest, *, stream: bool = False) -> Dict[str, Any]:
        return await build_generate_body(
            strip_model_prefix(self.target.model), request, fetch_media=self._fetch_media
        )

    def parse_chat(self, payload: Any, response: httpx.Response) -> ChatResponse:
        obj = expect_object(payload, provider=self.target.provider, model=self.target.model)
        if debug_enabled():
            log_event(
                self._logger,
                "gemini.raw_response",
                self.log_context("chat"),
                level=logging.DEBUG,
                payload=json.dumps(obj, ensure_ascii=False)[:4000],
            )
        return parse_generate_response(obj)

    async def video_generate(self, request: VideoRequest) -> VideoResponse:
        return await generate_video(self, request)
