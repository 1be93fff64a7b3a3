"""Unified configuration layer for the protocol client.

Built-in provider settings are merged in a predictable order:

1. Built-in defaults (``defaults.BUILTIN_PROVIDERS``)
2. Environment variables: ``<PROVIDER>_BASE_URL`` overrides the base URL

Caller-supplied configuration and per-call overrides take precedence over
both; that layering is owned by :mod:`llm_bridge.base.routing.router`.

Public API
----------
* get_builtin_provider_config(provider: str) -> dict | None
* builtin_provider_names() -> list[str]
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from .defaults import BUILTIN_PROVIDERS, ROUTER_FALLBACK_PROVIDER
from .env import is_placeholder, read_env_key


def get_builtin_provider_config(provider: str) -> Optional[Dict[str, Any]]:
    """Return the built-in settings for ``provider`` or ``None`` when unknown.

    The returned dict is a fresh copy with keys ``base_url``, ``api_key_env``
    and ``kind``. A non-empty ``<PROVIDER>_BASE_URL`` environment variable
    replaces the default base URL.
    """
    key = (provider or "").lower()
    base = BUILTIN_PROVIDERS.get(key)
    if base is None:
        return None
    cfg: Dict[str, Any] = dict(base)
    env_base = os.getenv(f"{key.upper()}_BASE_URL", "").strip()
    if env_base and not is_placeholder(env_base):
        cfg["base_url"] = env_base
    return cfg


def builtin_provider_names() -> List[str]:
    return sorted(BUILTIN_PROVIDERS)


__all__ = [
    "get_builtin_provider_config",
    "builtin_provider_names",
    "BUILTIN_PROVIDERS",
    "ROUTER_FALLBACK_PROVIDER",
    "read_env_key",
]
