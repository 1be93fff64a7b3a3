"""Streaming metrics data structures."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single stream.

    Attributes:
        emitted: Number of chunks handed to the consumer.
        time_to_first_token_ms: Delay from stream open to the first chunk
            carrying non-empty text.
        total_duration_ms: Delay from stream open to termination.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    _started: float = field(default_factory=time.perf_counter, repr=False)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._started) * 1000.0

    def record_chunk(self, has_text: bool) -> None:
        self.emitted += 1
        if has_text and self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()

    def finish(self) -> None:
        if self.total_duration_ms is None:
            self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]
