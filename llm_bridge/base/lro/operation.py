"""Long-running operation state.

An :class:`LroOperation` is created from a vendor's job-submission response,
updated in place by the poller on every status fetch, and dropped when the
call returns. It is never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class LroState(str, Enum):
    CREATED = "created"
    POLLING = "polling"
    DONE = "done"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class LroOperation:
    """A vendor-side asynchronous job.

    Attributes:
        operation_id: Vendor job id or operation name.
        status_url: Absolute URL polled for status.
        state: Current position in the poll state machine.
        done: Set by the interpreter when the vendor reports completion.
        error: Vendor error message for failed jobs, kept verbatim.
        result_locator: Where the artifact lives (URL/URI) once done.
        attempts: Number of status fetches performed.
        raw: Last status payload.
    """

    operation_id: str
    status_url: str
    state: LroState = LroState.CREATED
    done: bool = False
    error: Optional[str] = None
    result_locator: Optional[str] = None
    attempts: int = 0
    raw: Optional[Any] = None


__all__ = ["LroState", "LroOperation"]
