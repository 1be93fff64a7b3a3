"""Adapter factory.

Purpose
-------
Map a resolved :class:`~llm_bridge.base.models.ProviderKind` to the adapter
class speaking that wire protocol. Adapter modules are imported lazily using
``importlib`` so importing the package does not pull in every vendor.

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
  fallbacks; it either returns an adapter or raises ``ErrorCode.CONFIG``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

import httpx

from .errors import ErrorCode, ProviderError
from .models import ProviderKind, ProviderTarget


class AdapterFactory:
    """Create provider adapters for a resolved target."""

    _ADAPTERS: Dict[ProviderKind, Tuple[str, str]] = {
        ProviderKind.OPENAI_COMPATIBLE: ("llm_bridge.openai.client", "OpenAICompatAdapter"),
        ProviderKind.ANTHROPIC: ("llm_bridge.anthropic.client", "AnthropicAdapter"),
        ProviderKind.GEMINI: ("llm_bridge.gemini.client", "GeminiAdapter"),
    }

    @classmethod
    def adapter_class(cls, kind: ProviderKind) -> Type[Any]:
        entry = cls._ADAPTERS.get(kind)
        if entry is None:
            raise ProviderError(code=ErrorCode.CONFIG, message=f"no adapter for provider kind '{kind}'")
        module_path, class_name = entry
        return getattr(import_module(module_path), class_name)

    @classmethod
    def create(cls, target: ProviderTarget, client: httpx.AsyncClient, **kwargs: Any) -> Any:
        """Instantiate the adapter for ``target``.

        Parameters
        ----------
        target:
            Resolved endpoint, credential and vendor model name.
        client:
            Shared ``httpx.AsyncClient`` used for every request of the call.
        **kwargs:
            Forwarded to :class:`~llm_bridge.base.adapter.ProviderAdapter`
            (``retry_policy``, ``sleep``, ``max_sse_buffer_size``,
            ``timeout_config``).
        """
        klass = cls.adapter_class(target.kind)
        return klass(target, client, **kwargs)

    @classmethod
    def supported(cls) -> Tuple[ProviderKind, ...]:
        return tuple(cls._ADAPTERS.keys())


__all__ = ["AdapterFactory"]
