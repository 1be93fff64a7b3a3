"""Shared async HTTP plumbing for adapters.

Purpose:
    Provide the one pooled ``httpx.AsyncClient`` that every adapter call made
    through an :class:`~llm_bridge.client.LLMClient` shares, plus the small
    request/response helpers adapters use around it. Timeouts derive
    exclusively from :func:`get_timeout_config`.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle & cleanup:
    - ``httpx.AsyncClient`` connections are bound to the event loop that
      opened them, so there is no process-wide pool. The owning
      ``LLMClient`` closes the client it created via ``aclose()``; injected
      clients stay owned by the caller.

Design notes:
    - Connection reuse inside ``httpx`` is internally synchronized, so many
      concurrent calls can share one client without extra locking.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from ..errors import ErrorCode, ProviderError
from ..timeouts import TimeoutConfig, build_httpx_timeout


def create_async_client(
    *,
    timeout_config: Optional[TimeoutConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    max_connections: int = 100,
    max_keepalive_connections: int = 20,
) -> httpx.AsyncClient:
    """Return a new pooled ``httpx.AsyncClient``.

    Parameters:
        timeout_config: Optional explicit timeouts; defaults to the cached
            environment-derived configuration.
        transport: Optional transport (``httpx.MockTransport`` in tests).
        max_connections: Pool size across all hosts.
        max_keepalive_connections: Idle connections kept for reuse.
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max_keepalive_connections,
    )
    return httpx.AsyncClient(
        timeout=build_httpx_timeout(timeout_config),
        limits=limits,
        transport=transport,
        follow_redirects=True,
    )


def merge_headers(base: Mapping[str, str], extra: Optional[Mapping[str, str]]) -> dict:
    """Layer ``extra`` over ``base``; consumer headers always win.

    Header names compare case-insensitively, so ``Authorization`` from the
    consumer replaces an adapter's ``authorization``.
    """
    headers = dict(base)
    if extra:
        overridden = {name.lower() for name in extra}
        headers = {k: v for k, v in headers.items() if k.lower() not in overridden}
        headers.update(extra)
    return headers


async def read_error_body(response: httpx.Response) -> str:
    """Read a (possibly streaming) error response body as text."""
    try:
        await response.aread()
    except httpx.HTTPError:
        return ""
    try:
        return response.text
    except UnicodeDecodeError:
        return response.content.decode("utf-8", errors="replace")


def decode_json(response: httpx.Response, *, provider: str, model: Optional[str] = None) -> Any:
    """Decode a 2xx JSON body, mapping failures to ``ErrorCode.PARSE``."""
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(
            code=ErrorCode.PARSE,
            message=f"invalid JSON response: {exc}",
            provider=provider,
            model=model,
            status_code=response.status_code,
            raw=exc,
        ) from exc


def expect_object(payload: Any, *, provider: str, model: Optional[str] = None) -> dict:
    """Require a decoded payload to be a JSON object."""
    if not isinstance(payload, dict):
        raise ProviderError(
            code=ErrorCode.PARSE,
            message=f"expected JSON object, got {type(payload).__name__}",
            provider=provider,
            model=model,
        )
    return payload


__all__ = [
    "create_async_client",
    "merge_headers",
    "read_error_body",
    "decode_json",
    "expect_object",
]
