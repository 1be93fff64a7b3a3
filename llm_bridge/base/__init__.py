"""
Bridge Base Package

Exports the provider-agnostic core shared by every vendor adapter:

- Models: normalized request/response dataclasses and the resolved target
- DTOs: pydantic validation for inbound chat requests and provider config
- Routing: ``provider/model`` resolution
- Resilience: retry policy and controller
- Streaming: SSE decoding and the chat stream iterator
- LRO: long-running-operation polling
- Factory: lazy adapter selection by provider kind
"""

from .errors import ErrorCode, ProviderError
from .models import (
    ChatRequest,
    ChatResponse,
    ChatStreamChunk,
    ContentPart,
    ContentPartType,
    Message,
    ProviderKind,
    ProviderMetadata,
    ProviderTarget,
    Role,
    Usage,
)
from .dto import ChatRequestDTO, ProviderConfig, RouterConfig
from .routing import ModelRouter, resolve_target
from .resilience import DEFAULT_RETRY_POLICY, RetryPolicy, send_with_retry
from .streaming import ChatStream, SseDecoder, SseEvent, StreamMetrics, iter_sse_events
from .lro import LroOperation, LroState, PollPolicy, poll_operation
from .timeouts import TimeoutConfig, get_timeout_config
from .adapter import ProviderAdapter
from .factory import AdapterFactory

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    # Models
    "Role",
    "ContentPartType",
    "ContentPart",
    "Message",
    "ChatRequest",
    "ChatResponse",
    "ChatStreamChunk",
    "Usage",
    "ProviderKind",
    "ProviderMetadata",
    "ProviderTarget",
    # DTOs
    "ChatRequestDTO",
    "ProviderConfig",
    "RouterConfig",
    # Routing
    "ModelRouter",
    "resolve_target",
    # Resilience
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "send_with_retry",
    # Streaming
    "SseDecoder",
    "SseEvent",
    "iter_sse_events",
    "ChatStream",
    "StreamMetrics",
    # LRO
    "LroOperation",
    "LroState",
    "PollPolicy",
    "poll_operation",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    # Adapters
    "ProviderAdapter",
    "AdapterFactory",
]
