"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to each vendor's JSON body. The
request carries model selection, messages, sampling parameters, optional
structured-output and tool descriptors, and an escape-hatch ``extra`` merged
into the outbound body last.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .message import Message


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Model string, optionally prefixed ``"provider/"``.
        messages: Ordered list of chat `Message` instances.
        temperature: Sampling temperature.
        max_tokens: Completion token limit.
        max_completion_tokens: Newer OpenAI completion limit name.
        top_p: Nucleus sampling.
        stop: Stop sequence or sequences.
        seed: Deterministic sampling seed.
        presence_penalty: OpenAI presence penalty.
        frequency_penalty: OpenAI frequency penalty.
        user: End-user identifier.
        metadata: Vendor metadata object.
        response_format: Structured output descriptor, OpenAI shape
            (``{"type": "json_schema", "json_schema": {...}}``).
        tools: Tool/function descriptors, OpenAI shape.
        tool_choice: Tool selection directive.
        parallel_tool_calls: Whether parallel tool calls are allowed.
        reasoning_effort: Reasoning effort hint.
        thinking: Extended thinking configuration.
        extra: JSON-serializable fields merged into the request body last.
    """

    model: str
    messages: List[Message]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    top_p: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    seed: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    user: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    response_format: Optional[Dict[str, Any]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Any] = None
    parallel_tool_calls: Optional[bool] = None
    reasoning_effort: Optional[str] = None
    thinking: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def stop_list(self) -> List[str]:
        """Return ``stop`` as a list regardless of its input shape."""
        if self.stop is None:
            return []
        if isinstance(self.stop, str):
            return [self.stop]
        return list(self.stop)


__all__ = [
    "ChatRequest",
]
