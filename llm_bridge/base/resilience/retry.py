"""Retry controller for outbound HTTP requests.

``send_with_retry`` executes attempts ``0..=max_retries`` of a request built
fresh by a zero-argument factory on every attempt (``httpx.Request`` objects
with consumed bodies, multipart uploads in particular, are not safely
replayable).

Policy
------
- Network-level failures (``httpx.TransportError``: connect refused, DNS,
  timeouts) are always retryable.
- HTTP failures are retryable only for 429, 502, 503, 504 and 408. Every other
  non-2xx status raises immediately; 500 is deliberately not retried.
- After failed attempt ``n`` the controller sleeps ``policy.backoff(n)``
  before attempt ``n + 1``. Attempt 0 has no prior sleep.
- On exhaustion the last observed error is raised.

``request_json`` layers the single 2xx decode on top: a body that fails to
decode is an ``ErrorCode.PARSE`` error and is not retried.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol, Tuple

import httpx

from ..constants import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MAX_RETRIES,
)
from ..errors import (
    ErrorCode,
    ProviderError,
    classify_transport_error,
    http_status_error,
    is_retryable_status,
)
from ..http.client import decode_json, read_error_body
from ..logging import LogContext, get_logger, normalized_log_event

RequestFactory = Callable[[], httpx.Request]
Sleep = Callable[[float], Awaitable[Any]]

_logger = get_logger("llm_bridge.retry")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff configuration (seconds).

    Pure configuration: ``backoff`` depends only on the attempt index.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF
    max_backoff: float = DEFAULT_MAX_BACKOFF
    multiplier: float = DEFAULT_BACKOFF_MULTIPLIER

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_backoff < 0 or self.max_backoff < 0:
            raise ValueError("backoff durations must be >= 0")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, attempt: int) -> float:
        """Return ``min(initial_backoff * multiplier**attempt, max_backoff)``."""
        return min(self.initial_backoff * self.multiplier**attempt, self.max_backoff)

    @staticmethod
    def is_retryable_status(status: int) -> bool:
        return is_retryable_status(status)


DEFAULT_RETRY_POLICY = RetryPolicy()
NO_RETRY = RetryPolicy(max_retries=0)


async def send_with_retry(
    client: httpx.AsyncClient,
    build_request: RequestFactory,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    *,
    ctx: Optional[LogContext] = None,
    stream: bool = False,
    sleep: Sleep = asyncio.sleep,
    attempt_logger: Optional[AttemptLogger] = None,
    logger: Optional[logging.Logger] = None,
) -> httpx.Response:
    """Send a request with retries and return the first 2xx response.

    Parameters
    ----------
    client:
        Shared ``httpx.AsyncClient``.
    build_request:
        Zero-argument factory returning a fresh ``httpx.Request`` per attempt.
    policy:
        Retry configuration.
    ctx:
        Log context carrying provider/model for errors and retry events.
    stream:
        When true the 2xx response is returned unread (caller must close it);
        error responses are always read and closed here.
    sleep:
        Awaitable sleep, injectable for tests.
    attempt_logger:
        Optional callback notified after every failed attempt.

    Raises
    ------
    ProviderError
        ``ErrorCode.HTTP`` carrying the last observed failure.
    """
    log = logger or _logger
    provider = (ctx.provider if ctx else None) or "-"
    model = ctx.model if ctx else None
    last_error: Optional[ProviderError] = None

    for attempt in range(policy.max_attempts):
        request = build_request()
        try:
            response = await client.send(request, stream=stream)
        except httpx.TransportError as exc:
            error = classify_transport_error(exc, provider=provider, model=model)
        else:
            if response.is_success:
                return response
            body = await read_error_body(response)
            await response.aclose()
            error = http_status_error(response.status_code, body, provider=provider, model=model)

        last_error = error
        final = attempt + 1 >= policy.max_attempts or not error.retryable
        delay = None if final else policy.backoff(attempt)
        if attempt_logger is not None:
            attempt_logger(attempt=attempt, max_attempts=policy.max_attempts, delay=delay, error=error)
        if final:
            raise error from error.raw
        normalized_log_event(
            log,
            "http.retry",
            ctx,
            phase="retry",
            attempt=attempt,
            error_code=error.code.value,
            emitted=False,
            level=logging.WARNING,
            status_code=error.status_code,
            delay_s=delay,
            max_attempts=policy.max_attempts,
        )
        await sleep(delay)

    # Unreachable with max_retries >= 0; kept so the contract is explicit.
    raise last_error or ProviderError(
        code=ErrorCode.HTTP, message="no request attempt was made", provider=provider, model=model
    )


async def request_json(
    client: httpx.AsyncClient,
    build_request: RequestFactory,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    *,
    ctx: Optional[LogContext] = None,
    sleep: Sleep = asyncio.sleep,
    attempt_logger: Optional[AttemptLogger] = None,
) -> Tuple[Any, httpx.Response]:
    """``send_with_retry`` followed by exactly one JSON decode of the 2xx body.

    Returns ``(payload, response)`` so callers can read headers.
    """
    response = await send_with_retry(
        client, build_request, policy, ctx=ctx, sleep=sleep, attempt_logger=attempt_logger
    )
    payload = decode_json(
        response,
        provider=(ctx.provider if ctx else None) or "-",
        model=ctx.model if ctx else None,
    )
    return payload, response


class Stopwatch:
    """Monotonic elapsed-time helper for latency metadata."""

    def __init__(self) -> None:
        self._start = time.perf_counter()

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000.0


__all__ = [
    "AttemptLogger",
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "NO_RETRY",
    "send_with_retry",
    "request_json",
    "Stopwatch",
]
