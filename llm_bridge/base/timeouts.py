"""Unified timeout configuration for the protocol client.

This module centralizes timeout values used by the shared ``httpx.AsyncClient``
so no adapter hard-codes its own numbers.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, re-parsing environment overrides
    only when they change. Supported environment variables (all optional):
        LLM_BRIDGE_TIMEOUT_CONNECT_SECONDS
        LLM_BRIDGE_TIMEOUT_READ_SECONDS
        LLM_BRIDGE_TIMEOUT_STREAM_SECONDS
        LLM_BRIDGE_TIMEOUT_WRITE_SECONDS
        LLM_BRIDGE_TIMEOUT_POOL_SECONDS

build_httpx_timeout(config, streaming=False)
    Converts a :class:`TimeoutConfig` into ``httpx.Timeout``. Streaming calls
    use the idle ``stream_read`` value as the per-read timeout.

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache after first read).
3. Cancellation is cooperative (asyncio task cancellation); there is no
   signal-based guard here.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

import httpx


_ENV_PREFIX = "LLM_BRIDGE_TIMEOUT_"
_FIELDS = ("CONNECT", "READ", "STREAM", "WRITE", "POOL")


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_seconds: TCP/TLS connection establishment.
        read_seconds: Waiting for a non-streaming response body chunk.
        stream_read_seconds: Idle timeout between SSE reads.
        write_seconds: Sending the request body (multipart uploads included).
        pool_seconds: Waiting for a free pooled connection.
    """

    connect_seconds: float = 10.0
    read_seconds: float = 120.0
    stream_read_seconds: float = 300.0
    write_seconds: float = 60.0
    pool_seconds: float = 30.0


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name`` falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed when env overrides change."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(_ENV_PREFIX + f + "_SECONDS", "") for f in _FIELDS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_seconds=_parse_env_float(_ENV_PREFIX + "CONNECT_SECONDS", defaults.connect_seconds),
        read_seconds=_parse_env_float(_ENV_PREFIX + "READ_SECONDS", defaults.read_seconds),
        stream_read_seconds=_parse_env_float(_ENV_PREFIX + "STREAM_SECONDS", defaults.stream_read_seconds),
        write_seconds=_parse_env_float(_ENV_PREFIX + "WRITE_SECONDS", defaults.write_seconds),
        pool_seconds=_parse_env_float(_ENV_PREFIX + "POOL_SECONDS", defaults.pool_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def build_httpx_timeout(config: Optional[TimeoutConfig] = None, *, streaming: bool = False) -> httpx.Timeout:
    cfg = config or get_timeout_config()
    return httpx.Timeout(
        connect=cfg.connect_seconds,
        read=cfg.stream_read_seconds if streaming else cfg.read_seconds,
        write=cfg.write_seconds,
        pool=cfg.pool_seconds,
    )


__all__ = ["TimeoutConfig", "get_timeout_config", "build_httpx_timeout"]
