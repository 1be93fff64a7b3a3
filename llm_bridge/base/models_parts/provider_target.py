"""
Resolved provider target for a single call.

A :class:`ProviderTarget` is produced by the router for one logical call and
discarded afterwards; credentials can differ per call, so targets are never
cached.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class ProviderKind(str, Enum):
    """Wire-format family selecting the adapter."""

    OPENAI_COMPATIBLE = "openai_compatible"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


@dataclass(frozen=True)
class ProviderTarget:
    """Immutable endpoint + credential + concrete model for one call.

    Attributes:
        provider: Provider name the model string resolved to.
        kind: Wire-format family.
        base_url: API base URL without trailing slash.
        model: Concrete model name sent to the vendor.
        credential: API key, or ``None`` for no-auth providers. Hidden from repr.
        extra_headers: Headers layered over vendor auth headers on every request.
    """

    provider: str
    kind: ProviderKind
    base_url: str
    model: str
    credential: Optional[str] = field(default=None, repr=False)
    extra_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "extra_headers", MappingProxyType(dict(self.extra_headers)))

    def url(self, path: str) -> str:
        """Join ``path`` onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"


__all__ = ["ProviderKind", "ProviderTarget"]
