"""ChatStream contract tests: ordering, termination, error delivery, cleanup."""
from __future__ import annotations

import asyncio
from typing import List, Optional

import httpx
import pytest

from llm_bridge.anthropic import AnthropicStreamMapper
from llm_bridge.base.errors import ErrorCode, ProviderError
from llm_bridge.base.logging import LogContext, get_logger
from llm_bridge.base.streaming import ChatStream, SseEvent
from llm_bridge.openai import OpenAIStreamMapper

from ..utils import chunked, mock_client, sse_body


def _delta(text, **extra):
    payload = {"id": "r1", "choices": [{"delta": {"content": text}}]}
    payload.update(extra)
    return payload


class _TrackingStream(httpx.AsyncByteStream):
    """Serve ``data`` in ``size`` reads, or exactly the given ``parts``."""

    def __init__(self, data: bytes = b"", size: int = 5, parts: Optional[List[bytes]] = None):
        self.data = data
        self.size = size
        self.parts = parts
        self.closed = False

    async def __aiter__(self):
        if self.parts is not None:
            for part in self.parts:
                yield part
            return
        async for part in chunked(self.data, self.size):
            yield part

    async def aclose(self) -> None:
        self.closed = True


def _serving(byte_stream: _TrackingStream) -> httpx.AsyncClient:
    return mock_client(lambda request: httpx.Response(200, stream=byte_stream))


async def _open(client: httpx.AsyncClient, mapper, *, max_buffer_size=16 * 1024 * 1024) -> ChatStream:
    """Send a streaming request on an already-entered ``client`` and wrap the response."""
    response = await client.send(client.build_request("POST", "https://s.test/chat"), stream=True)
    return ChatStream(
        response,
        mapper,
        ctx=LogContext(provider=mapper.provider, model=mapper.model, operation="chat_stream"),
        logger=get_logger("llm_bridge.test.stream"),
        max_buffer_size=max_buffer_size,
    )


def test_openai_chunks_in_order_and_done_terminates(log_events):
    body = sse_body(_delta("Hel"), _delta("lo"), _delta(None, usage={"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}), done=True)
    body += sse_body(_delta("after-done"))
    byte_stream = _TrackingStream(body)
    mapper = OpenAIStreamMapper("openai", "gpt-4o")

    async def run():
        async with _serving(byte_stream) as client:
            stream = await _open(client, mapper)
            chunks = [c.content async for c in stream]
        return stream, chunks

    stream, chunks = asyncio.run(run())
    assert chunks == ["Hel", "lo", ""]  # nosec B101
    assert stream.usage.total_tokens == 5  # nosec B101
    assert stream.response_id == "r1"  # nosec B101
    assert stream.metrics.emitted == 3  # nosec B101
    assert stream.metrics.time_to_first_token_ms is not None  # nosec B101
    assert byte_stream.closed  # nosec B101
    end = log_events.named("stream.end")[0]
    assert end["tokens"] == {"prompt": 3, "completion": 2, "total": 5}  # nosec B101


def test_data_field_split_across_two_reads_yields_one_chunk():
    byte_stream = _TrackingStream(parts=[
        b'data: {"choices":[{"delta":{"con',
        b'tent":"Split"}}]}\n\ndata: [DONE]\n\n',
    ])

    async def run():
        async with _serving(byte_stream) as client:
            stream = await _open(client, OpenAIStreamMapper("openai", "m"))
            return [c.content async for c in stream]

    assert asyncio.run(run()) == ["Split"]  # nosec B101
    assert byte_stream.closed  # nosec B101


def test_malformed_json_raises_parse_after_valid_chunks(log_events):
    body = sse_body(_delta("ok")) + b"data: {not json}\n\n"
    byte_stream = _TrackingStream(body)
    received = []

    async def run():
        async with _serving(byte_stream) as client:
            stream = await _open(client, OpenAIStreamMapper("openai", "m"))
            async for chunk in stream:
                received.append(chunk.content)

    with pytest.raises(ProviderError) as ei:
        asyncio.run(run())
    assert ei.value.code is ErrorCode.PARSE  # nosec B101
    assert received == ["ok"]  # nosec B101
    assert byte_stream.closed  # nosec B101
    assert log_events.named("stream.error")[0]["error_code"] == "parse"  # nosec B101


def test_buffer_ceiling_fails_stream():
    body = b"data: " + b"z" * 200 + b"\n\n"

    async def run():
        async with _serving(_TrackingStream(body)) as client:
            stream = await _open(client, OpenAIStreamMapper("openai", "m"), max_buffer_size=64)
            return [c async for c in stream]

    with pytest.raises(ProviderError) as ei:
        asyncio.run(run())
    assert ei.value.code is ErrorCode.HTTP  # nosec B101
    assert "sse buffer exceeded" in ei.value.message  # nosec B101


def test_early_close_releases_connection():
    body = sse_body(*[_delta(str(i)) for i in range(20)], done=True)
    byte_stream = _TrackingStream(body)

    async def run():
        async with _serving(byte_stream) as client:
            stream = await _open(client, OpenAIStreamMapper("openai", "m"))
            async with stream:
                async for chunk in stream:
                    if chunk.content == "2":
                        break

    asyncio.run(run())
    assert byte_stream.closed  # nosec B101


def test_collect_accumulates_text_and_usage():
    body = sse_body(_delta("a"), _delta("b"), _delta("c", usage={"total_tokens": 9}), done=True)

    async def run():
        async with _serving(_TrackingStream(body)) as client:
            stream = await _open(client, OpenAIStreamMapper("openai", "m"))
            return await stream.collect()

    result = asyncio.run(run())
    assert result.content == "abc"  # nosec B101
    assert result.usage.total_tokens == 9  # nosec B101
    assert result.response_id == "r1"  # nosec B101
    assert result.meta.http_status == 200  # nosec B101


def test_anthropic_event_sequence():
    body = sse_body(
        ("message_start", {"type": "message_start", "message": {"id": "msg_1", "usage": {"input_tokens": 12, "output_tokens": 1}}}),
        ("content_block_start", {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
        ("ping", {"type": "ping"}),
        ("content_block_delta", {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hi"}}),
        ("content_block_delta", {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": " there"}}),
        ("content_block_stop", {"type": "content_block_stop", "index": 0}),
        ("message_delta", {"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": 7}}),
        ("message_stop", {"type": "message_stop"}),
    )
    byte_stream = _TrackingStream(body, size=11)

    async def run():
        async with _serving(byte_stream) as client:
            stream = await _open(client, AnthropicStreamMapper("anthropic", "claude"))
            chunks = [c.content async for c in stream]
        return stream, chunks

    stream, chunks = asyncio.run(run())
    assert chunks == ["Hi", " there"]  # nosec B101
    assert stream.usage.prompt_tokens == 12  # nosec B101
    assert stream.usage.completion_tokens == 7  # nosec B101
    assert stream.usage.total_tokens is None  # nosec B101
    assert stream.response_id == "msg_1"  # nosec B101


def test_anthropic_error_event_raises_http():
    mapper = AnthropicStreamMapper("anthropic", "claude")
    with pytest.raises(ProviderError) as ei:
        mapper(SseEvent("error", '{"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}'))
    assert ei.value.code is ErrorCode.HTTP  # nosec B101
    assert ei.value.message == "Overloaded"  # nosec B101


def test_openai_error_payload_raises_http():
    mapper = OpenAIStreamMapper("openrouter", "m")
    with pytest.raises(ProviderError) as ei:
        mapper(SseEvent(None, '{"error": {"message": "upstream died", "code": 502}}'))
    assert ei.value.status_code == 502  # nosec B101
    assert ei.value.message == "upstream died"  # nosec B101
