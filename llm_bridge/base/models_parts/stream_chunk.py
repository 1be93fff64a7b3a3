"""Incremental streaming chunk produced by the SSE decoder mappers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .usage import Usage


@dataclass
class ChatStreamChunk:
    """One decoded streaming event.

    Attributes:
        content: Incremental text delta (may be empty for usage-only events).
        usage: Usage snapshot when the event carried one.
        raw: Parsed event JSON for diagnostics.
    """

    content: str
    usage: Optional[Usage] = None
    raw: Optional[Any] = None


__all__ = ["ChatStreamChunk"]
