"""
Error classification helpers mapping HTTP outcomes to `ProviderError` values.

The retryable status set is deliberately narrow: 429 (rate limit), 408
(request timeout) and the gateway family 502/503/504. A plain 500 is not
retried because broadening to it changes behavior for non-idempotent calls.
"""
from __future__ import annotations

from typing import FrozenSet, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError

RETRYABLE_STATUSES: FrozenSet[int] = frozenset({429, 502, 503, 504, 408})

# Error bodies can be entire HTML pages; keep logs and messages bounded.
ERROR_BODY_MAX_LINES = 20


def is_retryable_status(status: int) -> bool:
    """Return True when ``status`` belongs to the transient HTTP set."""
    return status in RETRYABLE_STATUSES


def truncate_body(text: str, max_lines: int = ERROR_BODY_MAX_LINES) -> str:
    """Return at most the first ``max_lines`` lines of ``text``."""
    return "\n".join(text.splitlines()[:max_lines])


def http_status_error(
    status: int,
    body_text: str,
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Build the ``ErrorCode.HTTP`` error for a non-2xx response.

    The message follows ``"http {status}: {body}"`` with the body truncated to
    :data:`ERROR_BODY_MAX_LINES` lines.
    """
    body = truncate_body(body_text)
    return ProviderError(
        code=ErrorCode.HTTP,
        message=f"http {status}: {body}",
        provider=provider,
        model=model,
        status_code=status,
        body=body,
        retryable=is_retryable_status(status),
    )


def classify_transport_error(
    exc: httpx.TransportError,
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Wrap a network-level failure (connect, DNS, timeout) as a retryable error."""
    detail = str(exc) or exc.__class__.__name__
    return ProviderError(
        code=ErrorCode.HTTP,
        message=f"transport error: {detail}",
        provider=provider,
        model=model,
        retryable=True,
        raw=exc,
    )


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. ``httpx`` transport and status failures map to ``HTTP``.
        3. Decoding failures (``ValueError`` family) map to ``PARSE``.
        4. Anything else is reported as ``HTTP``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, httpx.HTTPError):
        return ErrorCode.HTTP
    if isinstance(exc, ValueError):
        return ErrorCode.PARSE
    return ErrorCode.HTTP


__all__ = [
    "RETRYABLE_STATUSES",
    "ERROR_BODY_MAX_LINES",
    "is_retryable_status",
    "truncate_body",
    "http_status_error",
    "classify_transport_error",
    "classify_exception",
]
