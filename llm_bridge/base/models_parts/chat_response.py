"""
ChatResponse DTO representing normalized provider responses.

The ``raw`` field can be used for debugging but is excluded from default
serialization to keep large vendor payloads out of logs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .provider_metadata import ProviderMetadata
from .usage import Usage


@dataclass
class ChatResponse:
    """Provider-agnostic response from a chat invocation.

    Attributes:
        content: Assistant text (empty string when the vendor returned none).
        usage: Token usage; unreported fields are ``None``.
        response_id: Vendor response identifier when reported.
        header_cost: Cost reported via the ``x-litellm-response-cost`` header.
        raw: Vendor JSON payload for diagnostics only.
        meta: Execution `ProviderMetadata` for observability.
    """

    content: str
    usage: Usage = field(default_factory=Usage)
    response_id: Optional[str] = None
    header_cost: Optional[float] = None
    raw: Optional[Any] = None
    meta: Optional[ProviderMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding raw provider objects."""
        return {
            "content": self.content,
            "usage": self.usage.to_dict(),
            "response_id": self.response_id,
            "header_cost": self.header_cost,
            "meta": self.meta.to_dict() if self.meta else None,
        }


__all__ = [
    "ChatResponse",
]
