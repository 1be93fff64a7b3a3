"""SSE framing tests for SseDecoder / iter_sse_events."""
from __future__ import annotations

import asyncio

import pytest

from llm_bridge.base.errors import ErrorCode, ProviderError
from llm_bridge.base.streaming import SseDecoder, SseEvent, iter_sse_events

from ..utils import chunked


def _decode_all(data: bytes, size: int, **kwargs):
    async def run():
        return [e async for e in iter_sse_events(chunked(data, size), **kwargs)]

    return asyncio.run(run())


def test_single_event():
    assert _decode_all(b"data: hello\n\n", 1024) == [SseEvent(None, "hello")]  # nosec B101


@pytest.mark.parametrize("size", [1, 2, 3, 7])
def test_events_survive_arbitrary_read_boundaries(size):
    data = b'event: a\ndata: {"x": 1}\n\ndata: second\r\n\r\n'
    assert _decode_all(data, size) == [SseEvent("a", '{"x": 1}'), SseEvent(None, "second")]  # nosec B101


def test_multibyte_utf8_split_across_reads():
    data = "data: héllo ☃\n\n".encode("utf-8")
    assert _decode_all(data, 1) == [SseEvent(None, "héllo ☃")]  # nosec B101


def test_multiline_data_joined_with_newline():
    assert _decode_all(b"data: a\ndata: b\ndata:c\n\n", 64) == [SseEvent(None, "a\nb\nc")]  # nosec B101


def test_comments_and_unknown_fields_ignored():
    data = b": keep-alive\nid: 7\nretry: 100\ndata: x\n\n"
    assert _decode_all(data, 64) == [SseEvent(None, "x")]  # nosec B101


def test_blank_line_without_data_resets_event_name():
    data = b"event: ping\n\ndata: y\n\n"
    assert _decode_all(data, 64) == [SseEvent(None, "y")]  # nosec B101


def test_only_one_leading_space_is_stripped():
    assert _decode_all(b"data:   spaced\n\n", 64) == [SseEvent(None, "  spaced")]  # nosec B101


def test_final_event_without_trailing_blank_line_is_flushed():
    assert _decode_all(b"data: tail", 4) == [SseEvent(None, "tail")]  # nosec B101


def test_data_over_ceiling_fails():
    with pytest.raises(ProviderError) as ei:
        _decode_all(b"data: " + b"x" * 100 + b"\n\n", 16, max_buffer_size=64)
    assert ei.value.code is ErrorCode.HTTP  # nosec B101
    assert "sse buffer exceeded 64 bytes" in ei.value.message  # nosec B101


def test_unterminated_line_over_ceiling_fails():
    decoder = SseDecoder(32)
    with pytest.raises(ProviderError) as ei:
        decoder.feed(b"data: " + b"y" * 64)
    assert ei.value.code is ErrorCode.HTTP  # nosec B101


def test_accumulated_lines_count_toward_ceiling():
    decoder = SseDecoder(10)
    decoder.feed(b"data: 12345\n")
    with pytest.raises(ProviderError):
        decoder.feed(b"data: 67890\n")


def test_invalid_utf8_is_parse_error():
    with pytest.raises(ProviderError) as ei:
        _decode_all(b"data: \xff\xfe\n\n", 64)
    assert ei.value.code is ErrorCode.PARSE  # nosec B101


def test_truncated_utf8_at_eof_is_parse_error():
    decoder = SseDecoder()
    decoder.feed(b"data: \xe2\x98")
    with pytest.raises(ProviderError) as ei:
        decoder.flush()
    assert ei.value.code is ErrorCode.PARSE  # nosec B101


def test_decoder_rejects_non_positive_ceiling():
    with pytest.raises(ValueError):
        SseDecoder(0)
