"""Model router: ``provider/model`` strings to concrete provider targets.

The router turns a model string plus caller configuration into a
:class:`~llm_bridge.base.models.ProviderTarget`. Configuration is layered:

1. explicit per-call override (``override=``)
2. caller-supplied named configuration (``RouterConfig.providers``)
3. built-in defaults for recognized provider names

Targets are built fresh on every call and never cached, since credentials
can differ per call.

Example usage:
    router = ModelRouter(RouterConfig(default_provider="anthropic"))
    target = router.resolve("claude-sonnet-4-5")
    target = router.resolve("openrouter/meta-llama/llama-3.3-70b-instruct")
"""

from __future__ import annotations

from typing import Optional, Tuple

from ...config import ROUTER_FALLBACK_PROVIDER, get_builtin_provider_config, read_env_key
from ..dto.provider_config import ProviderConfig, RouterConfig
from ..errors import ErrorCode, ProviderError
from ..models_parts.provider_target import ProviderTarget


def split_model(model: str) -> Tuple[Optional[str], str]:
    """Split ``model`` on its first ``/`` into ``(provider, concrete_model)``.

    Returns ``(None, model)`` when no ``/`` is present. Further slashes stay in
    the concrete model name.
    """
    provider, sep, rest = model.partition("/")
    if not sep:
        return None, model
    return provider, rest


def _builtin_config(provider: str) -> Optional[ProviderConfig]:
    raw = get_builtin_provider_config(provider)
    if raw is None:
        return None
    return ProviderConfig(**raw)


def resolve_credential(provider: str, config: ProviderConfig) -> Optional[str]:
    """Return the credential for ``provider`` or raise ``missing_api_key``.

    ``no_auth`` providers resolve to ``None``. Otherwise the inline key wins,
    then the configured environment variable (and its aliases).
    """
    if config.no_auth:
        return None
    if config.api_key:
        return config.api_key
    if config.api_key_env:
        value, _ = read_env_key(config.api_key_env)
        if value:
            return value
        raise ProviderError(
            code=ErrorCode.MISSING_API_KEY,
            message=f"missing api key: environment variable {config.api_key_env} is not set",
            provider=provider,
        )
    raise ProviderError(
        code=ErrorCode.MISSING_API_KEY,
        message=f"missing api key: no api_key or api_key_env configured for provider '{provider}'",
        provider=provider,
    )


def resolve_target(
    model: str,
    config: Optional[RouterConfig] = None,
    *,
    override: Optional[ProviderConfig] = None,
) -> ProviderTarget:
    """Resolve ``model`` into a :class:`ProviderTarget`.

    Raises:
        ProviderError: ``provider_not_found`` for unknown providers without
            configuration, ``missing_api_key`` when a required credential is
            absent, ``config`` when the resolved configuration has no base URL.
    """
    cfg = config or RouterConfig()
    provider, concrete = split_model(model)
    if provider is None:
        provider = cfg.default_provider or ROUTER_FALLBACK_PROVIDER
    if not provider or not concrete:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"invalid model string '{model}'",
            provider=provider or "-",
            model=concrete or None,
        )

    pcfg = override or cfg.providers.get(provider) or _builtin_config(provider)
    if pcfg is None:
        raise ProviderError(
            code=ErrorCode.PROVIDER_NOT_FOUND,
            message=f"provider '{provider}' is not configured",
            provider=provider,
            model=concrete,
        )
    if not pcfg.base_url:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"base_url required for provider '{provider}'",
            provider=provider,
            model=concrete,
        )
    try:
        credential = resolve_credential(provider, pcfg)
    except ProviderError as exc:
        exc.model = concrete
        raise
    return ProviderTarget(
        provider=provider,
        kind=pcfg.kind,
        base_url=pcfg.base_url,
        model=concrete,
        credential=credential,
        extra_headers=pcfg.extra_headers,
    )


class ModelRouter:
    """Resolve model strings against a fixed, read-only :class:`RouterConfig`."""

    def __init__(self, config: Optional[RouterConfig] = None) -> None:
        self._config = config or RouterConfig()

    @property
    def config(self) -> RouterConfig:
        return self._config

    def resolve(self, model: str, override: Optional[ProviderConfig] = None) -> ProviderTarget:
        return resolve_target(model, self._config, override=override)


__all__ = ["ModelRouter", "resolve_target", "resolve_credential", "split_model"]
