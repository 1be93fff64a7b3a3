"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration raised by the router, adapters, the retry
controller, the SSE decoder and the long-running-operation poller. Values are
lowercase snake_case and are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIG = "config"
    PROVIDER_NOT_FOUND = "provider_not_found"
    MISSING_API_KEY = "missing_api_key"
    HTTP = "http"
    PARSE = "parse"
    UNSUPPORTED = "unsupported"
    TIMEOUT = "timeout"


__all__ = ["ErrorCode"]
