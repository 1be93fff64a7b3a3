"""Shared testing utilities for adapter and transport tests.

Purpose:
    Provide the fakes every async test needs: a recording ``sleep`` so retry
    and poll waits are asserted instead of slept, an ``httpx.MockTransport``
    backed client, SSE body builders and resolved targets.

Exports:
    - RecordingSleep
    - mock_client(handler) -> httpx.AsyncClient
    - json_response(status, payload, headers=None) -> httpx.Response
    - sse_body(*events) -> bytes
    - chunked(data, size) -> async iterator of bytes
    - make_target(kind, ...) -> ProviderTarget
    - ListHandler: log record collector attached to the ``llm_bridge`` logger
"""
from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Optional

import httpx

from llm_bridge.base.models import ProviderKind, ProviderTarget


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def mock_client(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def json_response(status: int, payload: Any, headers: Optional[Mapping[str, str]] = None) -> httpx.Response:
    return httpx.Response(status, json=payload, headers=headers)


def sse_body(*events: Any, done: bool = False) -> bytes:
    """Encode ``events`` as SSE frames.

    Each event is either a payload (JSON-encoded into one ``data:`` line) or a
    ``(event_name, payload)`` tuple.
    """
    frames: List[str] = []
    for item in events:
        if isinstance(item, tuple):
            name, payload = item
            frames.append(f"event: {name}\ndata: {json.dumps(payload)}\n\n")
        else:
            frames.append(f"data: {json.dumps(item)}\n\n")
    if done:
        frames.append("data: [DONE]\n\n")
    return "".join(frames).encode("utf-8")


async def chunked(data: bytes, size: int) -> AsyncIterator[bytes]:
    for i in range(0, len(data), size):
        yield data[i:i + size]


def make_target(
    kind: ProviderKind = ProviderKind.OPENAI_COMPATIBLE,
    *,
    provider: str = "test",
    base_url: str = "https://api.test/v1",
    model: str = "m-1",
    credential: Optional[str] = "sk-test",
    extra_headers: Optional[Dict[str, str]] = None,
) -> ProviderTarget:
    return ProviderTarget(
        provider=provider,
        kind=kind,
        base_url=base_url,
        model=model,
        credential=credential,
        extra_headers=extra_headers or {},
    )


class ListHandler(logging.Handler):
    """Capture decoded JSON log events into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        try:
            self.events.append(json.loads(record.getMessage()))
        except ValueError:
            self.events.append({"message": record.getMessage()})

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]
