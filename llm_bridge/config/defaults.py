"""llm_bridge.config.defaults
=========================

Central place for small, stable default values used by the router and the
provider adapters.

Module Purpose
--------------
- Provide a single import location for built-in provider endpoints (no I/O).
- Keep adapters and the router free of magic literals.

This module intentionally avoids importing from other llm_bridge packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

from typing import Dict

# ---- Routing ----
# Provider used when a model string carries no "provider/" prefix and the
# caller configuration names no default.
ROUTER_FALLBACK_PROVIDER = "openai"

# Wire-kind identifiers (values of llm_bridge.base.models.ProviderKind).
KIND_OPENAI_COMPATIBLE = "openai_compatible"
KIND_ANTHROPIC = "anthropic"
KIND_GEMINI = "gemini"

# ---- Provider-specific defaults ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"

# Built-in provider table consulted after per-call overrides and caller
# configuration.
BUILTIN_PROVIDERS: Dict[str, Dict[str, str]] = {
    "openai": {
        "base_url": OPENAI_DEFAULT_BASE_URL,
        "api_key_env": "OPENAI_API_KEY",
        "kind": KIND_OPENAI_COMPATIBLE,
    },
    "openrouter": {
        "base_url": OPENROUTER_DEFAULT_BASE_URL,
        "api_key_env": "OPENROUTER_API_KEY",
        "kind": KIND_OPENAI_COMPATIBLE,
    },
    "anthropic": {
        "base_url": ANTHROPIC_DEFAULT_BASE_URL,
        "api_key_env": "ANTHROPIC_API_KEY",
        "kind": KIND_ANTHROPIC,
    },
    "gemini": {
        "base_url": GEMINI_DEFAULT_BASE_URL,
        "api_key_env": "GEMINI_API_KEY",
        "kind": KIND_GEMINI,
    },
    "xai": {
        "base_url": XAI_DEFAULT_BASE_URL,
        "api_key_env": "XAI_API_KEY",
        "kind": KIND_OPENAI_COMPATIBLE,
    },
}


__all__ = [
    "ROUTER_FALLBACK_PROVIDER",
    "KIND_OPENAI_COMPATIBLE",
    "KIND_ANTHROPIC",
    "KIND_GEMINI",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_BASE_URL",
    "XAI_DEFAULT_BASE_URL",
    "BUILTIN_PROVIDERS",
]
