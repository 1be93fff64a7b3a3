"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_bridge.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    ERROR_BODY_MAX_LINES,
    RETRYABLE_STATUSES,
    classify_exception,
    classify_transport_error,
    http_status_error,
    is_retryable_status,
    truncate_body,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "RETRYABLE_STATUSES",
    "ERROR_BODY_MAX_LINES",
    "is_retryable_status",
    "truncate_body",
    "http_status_error",
    "classify_transport_error",
    "classify_exception",
]
