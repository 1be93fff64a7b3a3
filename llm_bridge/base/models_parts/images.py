"""Image generation request/response DTOs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .usage import Usage


@dataclass
class ImageRequest:
    """Image generation parameters; unset fields are omitted from the body."""

    model: str
    prompt: str
    n: Optional[int] = None
    size: Optional[str] = None
    quality: Optional[str] = None
    background: Optional[str] = None


@dataclass
class GeneratedImage:
    b64_json: Optional[str] = None
    url: Optional[str] = None
    revised_prompt: Optional[str] = None


@dataclass
class ImageResponse:
    images: List[GeneratedImage]
    usage: Usage = field(default_factory=Usage)
    raw: Optional[Any] = None


__all__ = ["ImageRequest", "GeneratedImage", "ImageResponse"]
