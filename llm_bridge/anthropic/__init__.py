"""Anthropic provider package."""

from .client import AnthropicAdapter
from .stream_helpers import AnthropicStreamMapper

__all__ = ["AnthropicAdapter", "AnthropicStreamMapper"]
