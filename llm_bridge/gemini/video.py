"""Gemini (Veo) video generation via ``:predictLongRunning``.

The submission returns an operation ``name``; relative names are resolved
against the provider base URL and polled until ``done``. The result is the
remote video URI, not the video bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from ..base.errors import ErrorCode
from ..base.lro import GEMINI_VIDEO_POLL, LroOperation, PollPolicy, poll_operation
from ..base.models import VideoRequest, VideoResponse
from .helpers import strip_model_prefix

if TYPE_CHECKING:  # pragma: no cover
    from .client import GeminiAdapter

_URI_PATHS = (
    ("generateVideoResponse", "generatedSamples", 0, "video", "uri"),
    ("generatedVideos", 0, "uri"),
    ("videos", 0, "uri"),
)


def build_video_body(request: VideoRequest) -> Dict[str, Any]:
    parameters: Dict[str, Any] = {}
    if request.seconds is not None:
        parameters["durationSeconds"] = request.seconds
    if request.size is not None:
        parameters["resolution"] = request.size
    return {"instances": [{"prompt": request.prompt}], "parameters": parameters}


def operation_url(base_url: str, name: str) -> str:
    if name.startswith("http"):
        return name
    return f"{base_url.rstrip('/')}/{name.lstrip('/')}"


def _dig(value: Any, path: tuple) -> Any:
    for key in path:
        if isinstance(key, int):
            if not isinstance(value, list) or len(value) <= key:
                return None
        elif not isinstance(value, Mapping):
            return None
        value = value[key] if isinstance(key, int) else value.get(key)
    return value


def extract_video_uri(payload: Any) -> Optional[str]:
    response = payload.get("response") if isinstance(payload, Mapping) else None
    for path in _URI_PATHS:
        uri = _dig(response, path)
        if isinstance(uri, str) and uri:
            return uri
    return None


def interpret_status(operation: LroOperation, payload: Any) -> None:
    if not isinstance(payload, Mapping) or payload.get("done") is not True:
        return
    error = payload.get("error")
    if error is not None:
        message = error.get("message") if isinstance(error, Mapping) else error
        operation.error = str(message or "video generation failed")
        return
    operation.done = True
    operation.result_locator = extract_video_uri(payload)


async def generate_video(
    adapter: "GeminiAdapter",
    request: VideoRequest,
    *,
    policy: PollPolicy = GEMINI_VIDEO_POLL,
) -> VideoResponse:
    target = adapter.target
    ctx = adapter.log_context("video")
    model = strip_model_prefix(target.model)
    payload, _ = await adapter.post_json(
        target.url(f"models/{model}:predictLongRunning"), build_video_body(request), ctx=ctx
    )
    name = payload.get("name") if isinstance(payload, Mapping) else None
    if not isinstance(name, str) or not name:
        raise adapter.error(ErrorCode.PARSE, "missing operation name")

    operation = LroOperation(operation_id=name, status_url=operation_url(target.base_url, name))

    async def fetch_status(op: LroOperation) -> Any:
        status, _ = await adapter.get_json(op.status_url, ctx=ctx)
        return status

    await poll_operation(operation, fetch_status, interpret_status, policy, ctx=ctx, sleep=adapter.sleep)
    if not operation.result_locator:
        raise adapter.error(ErrorCode.PARSE, "missing video uri")
    return VideoResponse(video_url=operation.result_locator, operation_id=name, raw=operation.raw)


__all__ = ["build_video_body", "operation_url", "extract_video_uri", "interpret_status", "generate_video"]
