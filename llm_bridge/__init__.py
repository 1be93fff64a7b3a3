"""llm_bridge package

One normalized request/response surface over several LLM vendor HTTP APIs
(OpenAI-compatible, Anthropic Messages, Gemini), with SSE streaming, bounded
retries and long-running video job polling.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`LLMClient`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Configuration: :class:`ProviderConfig`, :class:`RouterConfig`
    - Models: chat, embedding, image and video request/response types
"""

from .base.errors import ErrorCode, ProviderError
from .base.dto import ChatRequestDTO, ProviderConfig, RouterConfig
from .base.logging import configure_logger, get_logger
from .base.models import (
    ChatRequest,
    ChatResponse,
    ChatStreamChunk,
    ContentPart,
    EmbeddingRequest,
    EmbeddingResponse,
    FileRef,
    ImageRequest,
    ImageResponse,
    ImageUrl,
    InputAudio,
    Message,
    ProviderKind,
    Usage,
    VideoRequest,
    VideoResponse,
)
from .base.resilience import RetryPolicy
from .base.streaming import ChatStream
from .client import LLMClient

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "LLMClient",
    "ChatStream",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    # Configuration
    "ProviderConfig",
    "RouterConfig",
    "ProviderKind",
    "RetryPolicy",
    "ChatRequestDTO",
    # Models
    "Message",
    "ContentPart",
    "ImageUrl",
    "InputAudio",
    "FileRef",
    "ChatRequest",
    "ChatResponse",
    "ChatStreamChunk",
    "Usage",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ImageRequest",
    "ImageResponse",
    "VideoRequest",
    "VideoResponse",
    # Logging
    "configure_logger",
    "get_logger",
]
