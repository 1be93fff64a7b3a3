"""Models parts package public surface.

`llm_bridge.base.models` remains the primary stable import path.
"""

from .content_part import ContentPart, ContentPartType, FileRef, ImageUrl, InputAudio
from .message import Message, Role
from .provider_metadata import ProviderMetadata
from .provider_target import ProviderKind, ProviderTarget
from .usage import Usage
from .chat_request import ChatRequest
from .chat_response import ChatResponse
from .stream_chunk import ChatStreamChunk
from .embeddings import EmbeddingRequest, EmbeddingResponse
from .images import GeneratedImage, ImageRequest, ImageResponse
from .video import VideoRequest, VideoResponse

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
