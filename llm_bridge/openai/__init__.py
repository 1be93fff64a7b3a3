"""
OpenAI-compatible provider package.

Exports:
- OpenAICompatAdapter: adapter for OpenAI, OpenRouter, xAI and compatible gateways
- OpenAIStreamMapper: chat-completion SSE mapper
"""

from .client import OpenAICompatAdapter
from .stream_helpers import OpenAIStreamMapper

__all__ = ["OpenAICompatAdapter", "OpenAIStreamMapper"]
