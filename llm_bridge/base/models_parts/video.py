"""
Video generation request/response DTOs.

Video jobs run as long-running operations. The result is either an inline
``data:`` URL (artifact downloaded and base64-encoded) or a remote URI the
vendor serves the artifact from; :class:`VideoResponse` carries both shapes in
``video_url``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class VideoRequest:
    """Video generation parameters.

    Attributes:
        model: Model string, optionally prefixed ``"provider/"``.
        prompt: Text prompt.
        seconds: Clip duration.
        size: Resolution, e.g. ``"1280x720"`` or ``"720p"``.
        input_reference: Optional reference image bytes sent as a multipart file.
        input_reference_mime: MIME type of ``input_reference``.
    """

    model: str
    prompt: str
    seconds: Optional[int] = None
    size: Optional[str] = None
    input_reference: Optional[bytes] = None
    input_reference_mime: str = "image/png"


@dataclass
class VideoResponse:
    video_url: str
    operation_id: Optional[str] = None
    raw: Optional[Any] = None

    @property
    def is_data_url(self) -> bool:
        return self.video_url.startswith("data:")


__all__ = ["VideoRequest", "VideoResponse"]
