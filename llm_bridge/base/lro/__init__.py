"""Long-running operation polling."""

from .operation import LroOperation, LroState
from .poller import GEMINI_VIDEO_POLL, OPENAI_VIDEO_POLL, PollPolicy, poll_operation

__all__ = [
    "LroOperation",
    "LroState",
    "PollPolicy",
    "OPENAI_VIDEO_POLL",
    "GEMINI_VIDEO_POLL",
    "poll_operation",
]
