"""Base shared constants for the protocol client.

Central location to avoid scattering magic strings and default numbers.
"""
from __future__ import annotations

# SSE decoder: hard ceiling on one event's accumulated data (16 MiB).
MAX_SSE_BUFFER_SIZE = 16 * 1024 * 1024

# Sentinel data payload terminating OpenAI-style streams.
SSE_DONE_SENTINEL = "[DONE]"

# Anthropic Messages API
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024

# Retry controller defaults (seconds)
DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 1.0
DEFAULT_MAX_BACKOFF = 30.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0

# Long-running-operation polling
DEFAULT_POLL_INTERVAL = 5.0
OPENAI_VIDEO_MAX_POLLS = 120
GEMINI_VIDEO_MAX_POLLS = 240

# Gateways such as LiteLLM proxy report per-call cost in this header.
RESPONSE_COST_HEADER = "x-litellm-response-cost"

__all__ = [
    "MAX_SSE_BUFFER_SIZE",
    "SSE_DONE_SENTINEL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_INITIAL_BACKOFF",
    "DEFAULT_MAX_BACKOFF",
    "DEFAULT_BACKOFF_MULTIPLIER",
    "DEFAULT_POLL_INTERVAL",
    "OPENAI_VIDEO_MAX_POLLS",
    "GEMINI_VIDEO_MAX_POLLS",
    "RESPONSE_COST_HEADER",
]
