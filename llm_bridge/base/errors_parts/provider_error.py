"""
Structured client error exception type.

Every failure surfaced by this package is a :class:`ProviderError` tagged with
a normalized `ErrorCode` so callers can branch on the kind while logs keep the
provider/model context.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured client error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        status_code: HTTP status for ``ErrorCode.HTTP`` failures that produced
            a response; ``None`` for transport failures.
        body: Truncated response body (first 20 lines) when available.
        retryable: Whether the retry controller treats the failure as transient.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "-"
    model: Optional[str] = None
    status_code: Optional[int] = None
    body: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
