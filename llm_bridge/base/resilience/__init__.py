"""Resilience helpers: the async retry controller."""

from .retry import DEFAULT_RETRY_POLICY, NO_RETRY, RetryPolicy, request_json, send_with_retry

__all__ = ["RetryPolicy", "DEFAULT_RETRY_POLICY", "NO_RETRY", "send_with_retry", "request_json"]
