"""Token usage extraction helpers.

Converts vendor usage payloads (already-decoded JSON mappings) into the
canonical :class:`~llm_bridge.base.models.Usage` record:

OpenAI-compatible
    ``usage.prompt_tokens`` / ``completion_tokens`` / ``total_tokens``,
    ``completion_tokens_details.reasoning_tokens`` for thoughts and an
    optional ``cost`` that some gateways report as a number or numeric string.
Anthropic
    ``usage.input_tokens`` / ``output_tokens``. No total is reported and none
    is derived.
Gemini
    ``usageMetadata.promptTokenCount`` / ``candidatesTokenCount`` /
    ``thoughtsTokenCount`` / ``totalTokenCount``.

Design Principles
-----------------
1. Absence is not zero: a missing or invalid counter stays ``None``; totals
   are never derived from partial data.
2. Coercion never raises: invalid or negative values downgrade to ``None``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models_parts.usage import Usage


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce ``value`` to a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def parse_cost(value: Any) -> Optional[float]:
    """Parse a cost reported as a JSON number or a numeric string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def extract_openai_usage(payload: Mapping[str, Any]) -> Usage:
    """Map an OpenAI-style ``usage`` object (the object itself, not the envelope)."""
    usage = _mapping(payload)
    details = _mapping(usage.get("completion_tokens_details"))
    return Usage(
        prompt_tokens=_coerce_int(usage.get("prompt_tokens")),
        completion_tokens=_coerce_int(usage.get("completion_tokens")),
        thoughts_tokens=_coerce_int(details.get("reasoning_tokens")),
        total_tokens=_coerce_int(usage.get("total_tokens")),
        cost_usd=parse_cost(usage.get("cost")),
    )


def extract_anthropic_usage(payload: Mapping[str, Any]) -> Usage:
    """Map an Anthropic ``usage`` object; ``total_tokens`` is left unset."""
    usage = _mapping(payload)
    return Usage(
        prompt_tokens=_coerce_int(usage.get("input_tokens")),
        completion_tokens=_coerce_int(usage.get("output_tokens")),
    )


def extract_gemini_usage(payload: Mapping[str, Any]) -> Usage:
    """Map a Gemini ``usageMetadata`` object."""
    usage = _mapping(payload)
    return Usage(
        prompt_tokens=_coerce_int(usage.get("promptTokenCount")),
        completion_tokens=_coerce_int(usage.get("candidatesTokenCount")),
        thoughts_tokens=_coerce_int(usage.get("thoughtsTokenCount")),
        total_tokens=_coerce_int(usage.get("totalTokenCount")),
    )


def usage_log_tokens(usage: Optional[Usage]) -> Optional[dict]:
    """Compact mapping for the ``tokens`` field of normalized log events."""
    if usage is None or usage.is_empty():
        return None
    return {
        "prompt": usage.prompt_tokens,
        "completion": usage.completion_tokens,
        "total": usage.total_tokens,
    }


__all__ = [
    "parse_cost",
    "extract_openai_usage",
    "extract_anthropic_usage",
    "extract_gemini_usage",
    "usage_log_tokens",
]
