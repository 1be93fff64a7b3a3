"""OpenAI video generation job flow.

create (multipart ``POST /videos``) → poll ``GET /videos/{id}`` every 5 s
for up to 120 attempts → one ``GET /videos/{id}/content`` download, returned
as a base64 ``data:`` URL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Tuple

from ..base.errors import ErrorCode
from ..base.lro import OPENAI_VIDEO_POLL, LroOperation, PollPolicy, poll_operation
from ..base.models import VideoRequest, VideoResponse
from ..base.resilience.retry import request_json
from ..base.utils.media import build_data_url

if TYPE_CHECKING:  # pragma: no cover
    from .client import OpenAICompatAdapter

DEFAULT_VIDEO_MIME = "video/mp4"


def build_video_form(model: str, request: VideoRequest) -> Dict[str, Tuple[Any, ...]]:
    """Multipart fields for ``POST /videos``; plain fields carry no filename."""
    form: Dict[str, Tuple[Any, ...]] = {
        "model": (None, model),
        "prompt": (None, request.prompt),
    }
    if request.seconds is not None:
        form["seconds"] = (None, str(request.seconds))
    if request.size is not None:
        form["size"] = (None, request.size)
    if request.input_reference is not None:
        form["input_reference"] = (
            "input_reference",
            request.input_reference,
            request.input_reference_mime,
        )
    return form


def vendor_error_message(error: Any) -> str:
    if isinstance(error, str) and error:
        return error
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    return "video generation failed"


def interpret_status(operation: LroOperation, payload: Any) -> None:
    status = payload.get("status") if isinstance(payload, Mapping) else None
    if status == "completed":
        operation.done = True
    elif status == "failed":
        operation.error = vendor_error_message(payload.get("error"))


async def generate_video(
    adapter: "OpenAICompatAdapter",
    request: VideoRequest,
    *,
    policy: PollPolicy = OPENAI_VIDEO_POLL,
) -> VideoResponse:
    target = adapter.target
    ctx = adapter.log_context("video")
    form = build_video_form(target.model, request)
    headers = adapter.headers()
    client = adapter.client
    payload, _ = await request_json(
        client,
        lambda: client.build_request("POST", target.url("videos"), files=form, headers=headers),
        adapter.retry_policy,
        ctx=ctx,
        sleep=adapter.sleep,
    )
    video_id = payload.get("id") if isinstance(payload, Mapping) else None
    if not isinstance(video_id, str) or not video_id:
        raise adapter.error(ErrorCode.PARSE, "video create response missing 'id'")

    operation = LroOperation(operation_id=video_id, status_url=target.url(f"videos/{video_id}"))

    async def fetch_status(op: LroOperation) -> Any:
        status, _ = await adapter.get_json(op.status_url, ctx=ctx)
        return status

    await poll_operation(operation, fetch_status, interpret_status, policy, ctx=ctx, sleep=adapter.sleep)
    operation.result_locator = target.url(f"videos/{video_id}/content")

    response = await adapter.get_bytes(operation.result_locator, ctx=ctx)
    content_type = response.headers.get("content-type", "").split(";")[0].strip()
    mime = content_type if content_type.startswith("video/") else DEFAULT_VIDEO_MIME
    return VideoResponse(
        video_url=build_data_url(response.content, mime),
        operation_id=video_id,
        raw=operation.raw,
    )


__all__ = ["build_video_form", "interpret_status", "generate_video"]
