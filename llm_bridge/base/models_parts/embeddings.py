"""Embedding request/response DTOs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from .usage import Usage


@dataclass
class EmbeddingRequest:
    model: str
    input: Union[str, List[str]]


@dataclass
class EmbeddingResponse:
    vectors: List[List[float]]
    usage: Usage = field(default_factory=Usage)
    raw: Optional[Any] = None


__all__ = ["EmbeddingRequest", "EmbeddingResponse"]
