"""
Provider-agnostic domain models public surface.

This module re-exports the one-class-per-file implementations under
``llm_bridge.base.models_parts`` to keep a single stable import path.
"""

from .models_parts import (
    ChatRequest,
    ChatResponse,
    ChatStreamChunk,
    ContentPart,
    ContentPartType,
    EmbeddingRequest,
    EmbeddingResponse,
    FileRef,
    GeneratedImage,
    ImageRequest,
    ImageResponse,
    ImageUrl,
    InputAudio,
    Message,
    ProviderKind,
    ProviderMetadata,
    ProviderTarget,
    Role,
    Usage,
    VideoRequest,
    VideoResponse,
)

__all__ = [
    "ContentPart",
    "ContentPartType",
    "FileRef",
    "ImageUrl",
    "InputAudio",
    "Message",
    "Role",
    "ProviderMetadata",
    "ProviderKind",
    "ProviderTarget",
    "Usage",
    "ChatRequest",
    "ChatResponse",
    "ChatStreamChunk",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "GeneratedImage",
    "ImageRequest",
    "ImageResponse",
    "VideoRequest",
    "VideoResponse",
]
