"""Streaming package.

Exposes the SSE decoder, the vendor mapper contract, the ``ChatStream``
iterator and stream metrics under a single namespace.
"""

from .sse import SseDecoder, SseEvent, iter_sse_events
from .mapper import END_OF_STREAM, MapResult, StreamMapper
from .streaming import ChatStream
from .streaming_metrics import StreamMetrics
from .streaming_finalize import finalize_stream

__all__ = [
    "SseDecoder",
    "SseEvent",
    "iter_sse_events",
    "END_OF_STREAM",
    "MapResult",
    "StreamMapper",
    "ChatStream",
    "StreamMetrics",
    "finalize_stream",
]
