"""llm_bridge.config.env
=====================

Credential environment variable lookup with alias support.

Purpose
-------
- Read a provider API key from the variable named by the provider config
  (``api_key_env``), falling back to known aliases.

Design Notes
------------
- Gemini historically supports two variable names; ``ENV_ALIASES`` lists them
  with the canonical first.
- Empty values count as unset.

Failure Modes
-------------
- Helpers never raise; they return ``None`` and callers (the router) decide
  which error to surface.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical env var → ordered tuple of acceptable names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "GEMINI_API_KEY": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', or starts with 'your_'.
    The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or v.startswith("your_")


def get_env_var_candidates(var_name: str) -> Iterable[str]:
    """Yield acceptable environment variable names for ``var_name``.

    The requested name is yielded first, followed by any aliases.
    """
    yield var_name
    for alias in ENV_ALIASES.get(var_name, ()):  # pragma: no branch - small tuples
        if alias != var_name:
            yield alias


def read_env_key(var_name: str) -> Tuple[Optional[str], Optional[str]]:
    """Read a credential from ``var_name`` or its aliases.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(var_name):
        if val := os.environ.get(name, "").strip():
            return val, name
    return None, None


__all__ = [
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "read_env_key",
]
