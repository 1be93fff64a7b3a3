"""Fixed-interval poller for long-running operations.

Polling waits are for job-not-ready states and never grow; transient request
failures while fetching status are the retry controller's concern.

State machine::

    created -> polling -> done | failed | timed_out

``failed`` raises ``ErrorCode.HTTP`` with the vendor message verbatim and
``timed_out`` raises ``ErrorCode.TIMEOUT`` once ``max_attempts`` status
fetches have not reached a terminal state. Both are terminal; nothing is
retried past the attempt ceiling.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from ..constants import DEFAULT_POLL_INTERVAL, GEMINI_VIDEO_MAX_POLLS, OPENAI_VIDEO_MAX_POLLS
from ..errors import ErrorCode, ProviderError
from ..logging import LogContext, get_logger, normalized_log_event
from .operation import LroOperation, LroState

FetchStatus = Callable[[LroOperation], Awaitable[Any]]
Interpret = Callable[[LroOperation, Any], None]
Sleep = Callable[[float], Awaitable[Any]]

_logger = get_logger("llm_bridge.lro")


@dataclass(frozen=True)
class PollPolicy:
    interval_seconds: float = DEFAULT_POLL_INTERVAL
    max_attempts: int = OPENAI_VIDEO_MAX_POLLS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")


OPENAI_VIDEO_POLL = PollPolicy(max_attempts=OPENAI_VIDEO_MAX_POLLS)
GEMINI_VIDEO_POLL = PollPolicy(max_attempts=GEMINI_VIDEO_MAX_POLLS)


async def poll_operation(
    operation: LroOperation,
    fetch_status: FetchStatus,
    interpret: Interpret,
    policy: PollPolicy = OPENAI_VIDEO_POLL,
    *,
    ctx: Optional[LogContext] = None,
    sleep: Sleep = asyncio.sleep,
    logger: Optional[logging.Logger] = None,
) -> LroOperation:
    """Poll ``operation`` until it is done, failed, or out of attempts.

    Parameters
    ----------
    operation:
        Job created from the submission response; updated in place.
    fetch_status:
        Awaitable returning the decoded status payload.
    interpret:
        Sets ``done``, ``error`` and ``result_locator`` from a payload.
    policy:
        Fixed interval and attempt ceiling.

    Returns
    -------
    LroOperation
        The same instance in state ``done``.
    """
    log = logger or _logger
    provider = (ctx.provider if ctx else None) or "-"
    model = ctx.model if ctx else None
    operation.state = LroState.POLLING

    for attempt in range(policy.max_attempts):
        payload = await fetch_status(operation)
        operation.attempts = attempt + 1
        operation.raw = payload
        interpret(operation, payload)

        if operation.error is not None:
            operation.state = LroState.FAILED
            normalized_log_event(
                log, "lro.failed", ctx, phase="poll", attempt=attempt,
                error_code=ErrorCode.HTTP.value, emitted=False,
                level=logging.WARNING, operation_id=operation.operation_id,
            )
            raise ProviderError(
                code=ErrorCode.HTTP,
                message=operation.error,
                provider=provider,
                model=model,
            )
        if operation.done:
            operation.state = LroState.DONE
            normalized_log_event(
                log, "lro.done", ctx, phase="poll", attempt=attempt, emitted=True,
                operation_id=operation.operation_id,
            )
            return operation

        normalized_log_event(
            log, "lro.poll", ctx, phase="poll", attempt=attempt, emitted=False,
            level=logging.DEBUG, operation_id=operation.operation_id,
        )
        if attempt + 1 < policy.max_attempts:
            await sleep(policy.interval_seconds)

    operation.state = LroState.TIMED_OUT
    raise ProviderError(
        code=ErrorCode.TIMEOUT,
        message=(
            f"operation {operation.operation_id} not finished after "
            f"{policy.max_attempts} polls"
        ),
        provider=provider,
        model=model,
    )


__all__ = ["PollPolicy", "OPENAI_VIDEO_POLL", "GEMINI_VIDEO_POLL", "poll_operation"]
