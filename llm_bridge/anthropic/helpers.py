"""Anthropic helpers module.

Purpose:
- Translate a normalized :class:`~llm_bridge.base.models.ChatRequest` into a
  Messages API body and normalize the JSON response, keeping ``client.py``
  limited to transport concerns.

External dependencies:
- None. Plain ``http://`` image URLs are fetched through the ``fetch_image``
  callable supplied by the adapter so this module stays free of I/O.

Structured output:
- Models advertising native structured output (Sonnet 4.5, Opus 4.1) get an
  ``output_format`` block; every other model is steered with a forced
  ``response_format`` tool whose ``input_schema`` is the requested schema.
"""

from __future__ import annotations

import base64
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from ..base.constants import ANTHROPIC_DEFAULT_MAX_TOKENS
from ..base.errors import ErrorCode, ProviderError
from ..base.models import ChatRequest, ChatResponse, ContentPart, Message
from ..base.tokens import extract_anthropic_usage
from ..base.utils.media import guess_mime_type, parse_data_url, url_scheme

FetchImage = Callable[[str], Awaitable[Tuple[bytes, Optional[str]]]]

RESPONSE_FORMAT_TOOL_NAME = "response_format"
OUTPUT_FORMAT_MODELS = ("sonnet-4-5", "sonnet-4.5", "opus-4-1", "opus-4.1")
_ALLOWED_ROLES = ("user", "assistant")


def _config_error(message: str, model: Optional[str]) -> ProviderError:
    return ProviderError(code=ErrorCode.CONFIG, message=message, model=model)


def resolve_max_tokens(request: ChatRequest) -> int:
    if request.max_tokens is not None:
        return request.max_tokens
    if request.max_completion_tokens is not None:
        return request.max_completion_tokens
    return ANTHROPIC_DEFAULT_MAX_TOKENS


def map_stop_sequences(request: ChatRequest) -> Optional[List[str]]:
    """Trimmed stop sequences with empty entries dropped; ``None`` if nothing remains."""
    stops = [s.strip() for s in request.stop_list() if isinstance(s, str)]
    stops = [s for s in stops if s]
    return stops or None


def model_supports_output_format(model: str) -> bool:
    lower = model.lower()
    return any(token in lower for token in OUTPUT_FORMAT_MODELS)


def extract_json_schema(response_format: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Pull the JSON schema out of an OpenAI-shaped ``response_format``.

    ``json_object`` without a schema maps to an open object schema; ``text``
    (or an unrecognized shape) yields ``None``.
    """
    if not isinstance(response_format, Mapping):
        return None
    kind = response_format.get("type")
    if not isinstance(kind, str) or kind == "text":
        return None
    if isinstance(response_format.get("response_schema"), Mapping):
        return dict(response_format["response_schema"])
    json_schema = response_format.get("json_schema")
    if isinstance(json_schema, Mapping) and isinstance(json_schema.get("schema"), Mapping):
        return dict(json_schema["schema"])
    if kind == "json_object":
        return {"type": "object", "properties": {}, "additionalProperties": True}
    return None


async def image_source(part: ContentPart, fetch_image: FetchImage, model: Optional[str]) -> Dict[str, Any]:
    """Map an ``image_url`` part to an Anthropic image ``source``."""
    image = part.image_url
    url = image.url if image else ""
    fmt = image.format if image else None
    scheme = url_scheme(url)
    if scheme == "https":
        return {"type": "url", "url": url}
    if scheme == "http":
        content, content_type = await fetch_image(url)
        media_type = fmt or content_type or guess_mime_type(url)
        return {
            "type": "base64",
            "media_type": media_type,
            "data": base64.b64encode(content).decode("ascii"),
        }
    data_url = parse_data_url(url)
    if data_url is not None:
        return {"type": "base64", "media_type": fmt or data_url.mime_type, "data": data_url.data}
    if fmt:
        # bare base64 payload with an explicit format
        return {"type": "base64", "media_type": fmt, "data": url}
    raise _config_error(
        "expected https, http or data URL for anthropic image; provide data:...;base64,... or format",
        model,
    )


async def content_blocks(message: Message, fetch_image: FetchImage, model: Optional[str]) -> List[Dict[str, Any]]:
    if not message.is_structured():
        return [{"type": "text", "text": message.content or ""}]
    blocks: List[Dict[str, Any]] = []
    for part in message.content or []:
        if part.type == "text":
            if part.text:
                blocks.append({"type": "text", "text": part.text})
        elif part.type == "image_url":
            blocks.append({"type": "image", "source": await image_source(part, fetch_image, model)})
        else:
            raise _config_error("anthropic does not support input_audio/file parts", model)
    return blocks


async def build_messages(
    messages: List[Message], fetch_image: FetchImage, model: Optional[str]
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Return ``(system_blocks, messages)`` for the Messages API."""
    system: List[Dict[str, Any]] = []
    turns: List[Dict[str, Any]] = []
    for message in messages:
        if message.role == "system":
            system.extend(await content_blocks(message, fetch_image, model))
            continue
        if message.role not in _ALLOWED_ROLES:
            raise _config_error(f"unsupported anthropic role: {message.role}", model)
        turns.append({"role": message.role, "content": await content_blocks(message, fetch_image, model)})
    return system, turns


def apply_response_format(body: Dict[str, Any], model: str, request: ChatRequest) -> None:
    """Set ``output_format`` or the forced ``response_format`` tool on ``body``."""
    tools = list(request.tools) if request.tools else None
    tool_choice = request.tool_choice
    schema = extract_json_schema(request.response_format)
    if schema is not None and model_supports_output_format(model):
        body["output_format"] = {"type": "json_schema", "schema": schema}
    elif schema is not None:
        tools = (tools or []) + [{"name": RESPONSE_FORMAT_TOOL_NAME, "input_schema": schema}]
        if tool_choice is None:
            tool_choice = {"type": "tool", "name": RESPONSE_FORMAT_TOOL_NAME}
    if tools is not None:
        body["tools"] = tools
    if tool_choice is not None:
        body["tool_choice"] = tool_choice


async def build_messages_body(
    model: str,
    request: ChatRequest,
    *,
    fetch_image: FetchImage,
    stream: bool = False,
) -> Dict[str, Any]:
    """Build the ``POST /v1/messages`` JSON body."""
    system, turns = await build_messages(request.messages, fetch_image, model)
    body: Dict[str, Any] = {
        "model": model,
        "messages": turns,
        "max_tokens": resolve_max_tokens(request),
    }
    if stream:
        body["stream"] = True
    if system:
        body["system"] = system
    if request.temperature is not None:
        body["temperature"] = request.temperature
    if request.top_p is not None:
        body["top_p"] = request.top_p
    stops = map_stop_sequences(request)
    if stops:
        body["stop_sequences"] = stops
    apply_response_format(body, model, request)
    if request.metadata is not None:
        body["metadata"] = request.metadata
    elif request.user is not None:
        body["metadata"] = {"user_id": request.user}
    body.update(request.extra)
    return body


def extract_text(payload: Mapping[str, Any]) -> str:
    """Concatenate ``content[].text`` of text parts; fall back to ``completion``."""
    content = payload.get("content")
    if isinstance(content, list):
        return "".join(
            part["text"]
            for part in content
            if isinstance(part, Mapping) and part.get("type") == "text" and isinstance(part.get("text"), str)
        )
    completion = payload.get("completion")
    return completion if isinstance(completion, str) else ""


def parse_messages_response(payload: Mapping[str, Any]) -> ChatResponse:
    response_id = payload.get("id")
    return ChatResponse(
        content=extract_text(payload),
        usage=extract_anthropic_usage(payload.get("usage") or {}),
        response_id=response_id if isinstance(response_id, str) else None,
        raw=payload,
    )


__all__ = [
    "RESPONSE_FORMAT_TOOL_NAME",
    "resolve_max_tokens",
    "map_stop_sequences",
    "model_supports_output_format",
    "extract_json_schema",
    "build_messages",
    "build_messages_body",
    "extract_text",
    "parse_messages_response",
]
