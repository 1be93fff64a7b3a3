"""Caller-supplied provider configuration.

Purpose
-------
Typed configuration consumed by the model router. A :class:`RouterConfig`
names an optional default provider and a mapping of provider name to
:class:`ProviderConfig`; a single :class:`ProviderConfig` can also be passed
per call as an explicit override.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation (``kind`` strings are coerced to
  :class:`~llm_bridge.base.models.ProviderKind`).

Failure modes & side effects
----------------------------
- Pure data containers: no I/O. The inline ``api_key`` is excluded from
  ``repr`` so configs can be logged safely.
"""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models_parts.provider_target import ProviderKind


class ProviderConfig(BaseModel):
    """Settings for one named provider.

    Attributes
    ----------
    base_url:
        API base URL. Required by the router; left optional here so partial
        configs fail with a descriptive ``config`` error at resolve time.
    api_key_env:
        Environment variable holding the credential.
    api_key:
        Inline credential; takes precedence over ``api_key_env``.
    kind:
        Wire-format family selecting the adapter.
    no_auth:
        When true no credential is required or sent.
    extra_headers:
        Headers layered over vendor auth headers on every request.
    """

    model_config = ConfigDict(frozen=True)

    base_url: Optional[str] = None
    api_key_env: Optional[str] = None
    api_key: Optional[str] = Field(default=None, repr=False)
    kind: ProviderKind = ProviderKind.OPENAI_COMPATIBLE
    no_auth: bool = False
    extra_headers: Dict[str, str] = Field(default_factory=dict)

    def with_base_url(self, base_url: str) -> "ProviderConfig":
        return self.model_copy(update={"base_url": base_url})

    def with_api_key(self, api_key: str) -> "ProviderConfig":
        return self.model_copy(update={"api_key": api_key})

    def with_api_key_env(self, name: str) -> "ProviderConfig":
        return self.model_copy(update={"api_key_env": name})

    def with_header(self, name: str, value: str) -> "ProviderConfig":
        headers = dict(self.extra_headers)
        headers[name] = value
        return self.model_copy(update={"extra_headers": headers})

    def without_auth(self) -> "ProviderConfig":
        return self.model_copy(update={"no_auth": True})


class RouterConfig(BaseModel):
    """Caller configuration: default provider plus named provider settings."""

    default_provider: Optional[str] = None
    providers: Dict[str, ProviderConfig] = Field(default_factory=dict)

    def with_provider(self, name: str, config: ProviderConfig) -> "RouterConfig":
        providers = dict(self.providers)
        providers[name] = config
        return self.model_copy(update={"providers": providers})

    def with_default_provider(self, name: str) -> "RouterConfig":
        return self.model_copy(update={"default_provider": name})


__all__ = ["ProviderConfig", "RouterConfig"]
