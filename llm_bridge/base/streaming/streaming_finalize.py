"""Finalize stream helper: one consolidated log event per stream."""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from ..models_parts.usage import Usage
from ..tokens import usage_log_tokens
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    usage: Optional[Usage] = None,
    error_code: Optional[str] = None,
    error: Optional[str] = None,
) -> None:
    """Close out ``metrics`` and emit ``stream.end`` or ``stream.error``."""
    metrics.finish()
    normalized_log_event(
        logger,
        "stream.end" if error_code is None else "stream.error",
        ctx,
        phase="finalize",
        emitted=metrics.emitted > 0,
        tokens=usage_log_tokens(usage),
        error_code=error_code,
        level=logging.INFO if error_code is None else logging.WARNING,
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error,
    )


__all__ = ["finalize_stream"]
