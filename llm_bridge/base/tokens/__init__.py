"""Token usage helpers package."""

from .extraction import (
    extract_anthropic_usage,
    extract_gemini_usage,
    extract_openai_usage,
    parse_cost,
    usage_log_tokens,
)

__all__ = [
    "extract_openai_usage",
    "extract_anthropic_usage",
    "extract_gemini_usage",
    "parse_cost",
    "usage_log_tokens",
]
