"""Errors parts package public surface.

Prefer importing from `llm_bridge.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, http_status_error

__all__ = ["ErrorCode", "ProviderError", "classify_exception", "http_status_error"]
