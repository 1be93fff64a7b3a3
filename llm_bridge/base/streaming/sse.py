"""Server-Sent Events decoding.

:class:`SseDecoder` is the per-session state machine: it owns the partial
line carried between network reads, the current event name, the accumulated
``data`` lines and an incremental UTF-8 decoder. It is advanced one network
read at a time, so a ``data:`` field split across reads reassembles before
the event is emitted.

Framing rules:

- lines end with ``\\n`` (a trailing ``\\r`` is stripped)
- ``:``-prefixed lines are comments
- ``event: <name>`` sets the event name; ``data: <text>`` appends a data line
  (consecutive data lines are joined with ``\\n``); other fields are ignored
- a blank line terminates the event, which is emitted only when its data is
  non-empty

The accumulated data (and any unterminated line) is bounded by
``max_buffer_size``; exceeding it fails the decode with ``ErrorCode.HTTP``
instead of growing without limit.
"""
from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import AsyncIterator, List, Optional

from ..constants import MAX_SSE_BUFFER_SIZE
from ..errors import ErrorCode, ProviderError


@dataclass(frozen=True)
class SseEvent:
    event_name: Optional[str]
    data: str


class SseDecoder:
    """Incremental SSE decoder for one stream."""

    def __init__(
        self,
        max_buffer_size: int = MAX_SSE_BUFFER_SIZE,
        *,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> None:
        if max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be positive")
        self._max = max_buffer_size
        self._provider = provider
        self._model = model
        self._utf8 = codecs.getincrementaldecoder("utf-8")()
        self._pending = ""
        self._event_name: Optional[str] = None
        self._data_lines: List[str] = []
        self._data_size = 0

    def feed(self, chunk: bytes) -> List[SseEvent]:
        """Consume one network read and return the events it completed."""
        return self._consume(self._decode(chunk, final=False))

    def flush(self) -> List[SseEvent]:
        """Finish the stream: process an unterminated last line and event."""
        events = self._consume(self._decode(b"", final=True))
        if self._pending:
            line, self._pending = self._pending, ""
            self._process_line(line)
        event = self._dispatch()
        if event is not None:
            events.append(event)
        return events

    def _decode(self, chunk: bytes, *, final: bool) -> str:
        try:
            return self._utf8.decode(chunk, final)
        except UnicodeDecodeError as exc:
            raise ProviderError(
                code=ErrorCode.PARSE,
                message=f"invalid utf-8 in event stream: {exc.reason}",
                provider=self._provider,
                model=self._model,
                raw=exc,
            ) from exc

    def _consume(self, text: str) -> List[SseEvent]:
        if not text:
            return []
        lines = (self._pending + text).split("\n")
        self._pending = lines.pop()
        events: List[SseEvent] = []
        for line in lines:
            if line.endswith("\r"):
                line = line[:-1]
            if line:
                self._process_line(line)
                continue
            event = self._dispatch()
            if event is not None:
                events.append(event)
        if len(self._pending) > self._max:
            self._overflow()
        return events

    def _process_line(self, line: str) -> None:
        if line.startswith(":"):
            return
        field, sep, value = line.partition(":")
        if not sep:
            return
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            self._event_name = value
        elif field == "data":
            size = self._data_size + len(value.encode("utf-8")) + (1 if self._data_lines else 0)
            if size > self._max:
                self._overflow()
            self._data_lines.append(value)
            self._data_size = size

    def _dispatch(self) -> Optional[SseEvent]:
        data = "\n".join(self._data_lines)
        name = self._event_name
        self._event_name = None
        self._data_lines = []
        self._data_size = 0
        if not data:
            return None
        return SseEvent(event_name=name, data=data)

    def _overflow(self) -> None:
        raise ProviderError(
            code=ErrorCode.HTTP,
            message=f"sse buffer exceeded {self._max} bytes",
            provider=self._provider,
            model=self._model,
        )


async def iter_sse_events(
    chunks: AsyncIterator[bytes],
    *,
    max_buffer_size: int = MAX_SSE_BUFFER_SIZE,
    provider: str = "-",
    model: Optional[str] = None,
) -> AsyncIterator[SseEvent]:
    """Decode an async byte iterator into :class:`SseEvent` values, in order."""
    decoder = SseDecoder(max_buffer_size, provider=provider, model=model)
    async for chunk in chunks:
        for event in decoder.feed(chunk):
            yield event
    for event in decoder.flush():
        yield event


__all__ = ["SseEvent", "SseDecoder", "iter_sse_events"]
