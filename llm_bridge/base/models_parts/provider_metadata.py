"""
Provider call metadata model.

Diagnostic metadata attached to normalized responses (HTTP status, latency,
resolved provider and model).
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass
class ProviderMetadata:
    """Execution metadata for a provider call.

    Attributes:
        provider_name: Provider key the call resolved to (e.g., ``"openai"``).
        model_name: Concrete model name sent to the vendor.
        http_status: Final HTTP status code.
        latency_ms: End-to-end latency including retries, in milliseconds.
        extra: Opaque, JSON-serializable map for adapter-specific diagnostics.
    """

    provider_name: str
    model_name: str
    http_status: Optional[int] = None
    latency_ms: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the metadata fields."""
        return asdict(self)


__all__ = [
    "ProviderMetadata",
]
