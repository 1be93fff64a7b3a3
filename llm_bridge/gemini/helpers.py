"""Gemini ``generateContent`` translation helpers.

Functions mapping the normalized chat shape onto Gemini ``contents``, with
no I/O of their own:

- system messages are lifted into ``system_instruction.parts``, media included;
- consecutive user (or assistant) messages collapse into one content entry,
  with ``assistant`` renamed to ``model``;
- assistant ``tool_calls`` become ``function_call`` parts and the answering
  ``tool``/``function`` messages become ``function_response`` parts, the
  function name recovered from ``name`` or the matching ``tool_call_id``;
- media references become ``file_data`` (remote URIs) or ``inline_data``
  (``data:`` URLs and audio);
- http(s) media attached to tool responses is downloaded through the
  ``fetch_media`` callable supplied by the adapter and sent as ``inline_data``.
"""

from __future__ import annotations

import base64
import json
import os
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ChatRequest, ChatResponse, ContentPart, Message
from ..base.tokens import extract_gemini_usage
from ..base.utils.media import guess_mime_type, normalize_mime, parse_data_url, url_scheme

FetchMedia = Callable[[str], Awaitable[Tuple[bytes, Optional[str]]]]

GEMINI_DEBUG_ENV = "LLM_BRIDGE_GEMINI_DEBUG"
MODELS_PREFIX = "models/"
_REMOTE_SCHEMES = ("gs", "http", "https")
_FETCHED_SCHEMES = ("http", "https")
_MEDIA_RESOLUTION = {
    "low": "MEDIA_RESOLUTION_LOW",
    "medium": "MEDIA_RESOLUTION_MEDIUM",
    "high": "MEDIA_RESOLUTION_HIGH",
    "ultra_high": "MEDIA_RESOLUTION_ULTRA_HIGH",
}


def _config_error(message: str, model: Optional[str]) -> ProviderError:
    return ProviderError(code=ErrorCode.CONFIG, message=message, model=model)


def strip_model_prefix(model: str) -> str:
    return model[len(MODELS_PREFIX):] if model.startswith(MODELS_PREFIX) else model


def media_part(url: str, fmt: Optional[str], detail: Optional[str], model: Optional[str]) -> Dict[str, Any]:
    """Map a media reference to a ``file_data`` or ``inline_data`` part."""
    if url_scheme(url) in _REMOTE_SCHEMES:
        mime = fmt or guess_mime_type(url, fallback="")
        if not mime:
            raise _config_error(f"missing media mime type for {url}", model)
        part: Dict[str, Any] = {"file_data": {"mime_type": mime, "file_uri": url}}
    else:
        data_url = parse_data_url(url)
        if data_url is None:
            raise _config_error("unsupported gemini media url", model)
        part = {"inline_data": {"mime_type": fmt or data_url.mime_type, "data": data_url.data}}
    level = _MEDIA_RESOLUTION.get(detail or "")
    if level:
        part["media_resolution"] = {"level": level}
    return part


def content_parts(message: Message, model: Optional[str]) -> List[Dict[str, Any]]:
    if not message.is_structured():
        return [{"text": message.content or ""}] if message.content else []
    out: List[Dict[str, Any]] = []
    for part in message.content or []:
        out.extend(_map_part(part, model))
    return out


def _map_part(part: ContentPart, model: Optional[str]) -> List[Dict[str, Any]]:
    if part.type == "text":
        return [{"text": part.text}] if part.text else []
    if part.type == "image_url" and part.image_url is not None:
        image = part.image_url
        return [media_part(image.url, image.format, image.detail, model)]
    if part.type == "input_audio" and part.input_audio is not None:
        audio = part.input_audio
        return [{"inline_data": {"mime_type": normalize_mime(audio.format, "audio"), "data": audio.data}}]
    if part.type == "file" and part.file is not None:
        ref = part.file.file_id or part.file.file_data
        if not ref:
            raise _config_error("file_id or file_data required", model)
        return [media_part(ref, part.file.format, part.file.detail, model)]
    raise _config_error(f"unsupported gemini content part: {part.type}", model)


def _parse_arguments(raw: Any, model: Optional[str]) -> Any:
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str) or not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ProviderError(
            code=ErrorCode.PARSE,
            message=f"tool_call arguments are not valid JSON: {exc}",
            model=model,
        ) from exc


def tool_call_parts(message: Message, model: Optional[str]) -> Tuple[List[Dict[str, Any]], Dict[str, str]]:
    """``function_call`` parts plus an ``id -> name`` map for later responses."""
    parts: List[Dict[str, Any]] = []
    names: Dict[str, str] = {}
    for call in message.tool_calls or []:
        function = call.get("function") if isinstance(call, Mapping) else None
        if not isinstance(function, Mapping):
            raise _config_error("tool_call missing function", model)
        name = function.get("name")
        if not isinstance(name, str) or not name:
            raise _config_error("tool_call missing name", model)
        parts.append({"function_call": {"name": name, "args": _parse_arguments(function.get("arguments"), model)}})
        if isinstance(call.get("id"), str):
            names[call["id"]] = name
    return parts, names


def _tool_response_data(text: str) -> Any:
    trimmed = text.strip()
    if trimmed.startswith(("{", "[")):
        try:
            return json.loads(trimmed)
        except ValueError:
            pass
    return {"content": text}


async def inline_remote_media(
    url: str, fmt: Optional[str], fetch_media: Optional[FetchMedia], model: Optional[str]
) -> Dict[str, Any]:
    """Download an http(s) reference and return it as an ``inline_data`` part.

    The MIME type comes from the explicit format, then the response
    ``Content-Type``, then the URL extension.
    """
    if fetch_media is None:
        raise _config_error(f"cannot inline remote media without a fetcher: {url}", model)
    content, content_type = await fetch_media(url)
    mime = fmt or content_type or guess_mime_type(url)
    return {"inline_data": {"mime_type": mime, "data": base64.b64encode(content).decode("ascii")}}


async def _tool_media(part: ContentPart, fetch_media: Optional[FetchMedia], model: Optional[str]) -> List[Dict[str, Any]]:
    ref, fmt = None, None
    if part.type == "image_url" and part.image_url is not None:
        ref, fmt = part.image_url.url, part.image_url.format
    elif part.type == "file" and part.file is not None:
        ref, fmt = part.file.file_id or part.file.file_data, part.file.format
    if ref and url_scheme(ref) in _FETCHED_SCHEMES:
        return [await inline_remote_media(ref, fmt, fetch_media, model)]
    return _map_part(part, model)


async def tool_response_parts(
    message: Message,
    known: Mapping[str, str],
    model: Optional[str],
    fetch_media: Optional[FetchMedia] = None,
) -> List[Dict[str, Any]]:
    name = message.name or known.get(message.tool_call_id or "")
    if not name:
        raise _config_error("missing tool name for tool response", model)
    media: List[Dict[str, Any]] = []
    if message.is_structured():
        text = "".join(p.text or "" for p in message.content if p.type == "text")
        for p in message.content:
            if p.type != "text":
                media.extend(await _tool_media(p, fetch_media, model))
    else:
        text = message.content or ""
    return [{"function_response": {"name": name, "response": _tool_response_data(text)}}] + media


async def build_contents(
    messages: List[Message], model: Optional[str], fetch_media: Optional[FetchMedia] = None
) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    known_calls: Dict[str, str] = {}
    i = 0
    while i < len(messages):
        role = messages[i].role
        parts: List[Dict[str, Any]] = []
        if role in ("tool", "function"):
            while i < len(messages) and messages[i].role in ("tool", "function"):
                parts.extend(await tool_response_parts(messages[i], known_calls, model, fetch_media))
                i += 1
            if parts:
                contents.append({"parts": parts})
            continue
        if role in ("user", "assistant"):
            while i < len(messages) and messages[i].role == role:
                parts.extend(content_parts(messages[i], model))
                if role == "assistant":
                    calls, names = tool_call_parts(messages[i], model)
                    parts.extend(calls)
                    known_calls.update(names)
                i += 1
            if parts:
                contents.append({"role": "model" if role == "assistant" else "user", "parts": parts})
            continue
        parts = content_parts(messages[i], model)
        if parts:
            contents.append({"role": "user", "parts": parts})
        i += 1
    if not contents:
        contents.append({"role": "user", "parts": [{"text": " "}]})
    return contents


def response_schema(response_format: Optional[Mapping[str, Any]]) -> Tuple[bool, Optional[Dict[str, Any]]]:
    """Return ``(wants_json, schema)`` for an OpenAI-shaped ``response_format``."""
    if not isinstance(response_format, Mapping):
        return False, None
    kind = response_format.get("type")
    if kind not in ("json_object", "json_schema"):
        return False, None
    if isinstance(response_format.get("response_schema"), Mapping):
        return True, dict(response_format["response_schema"])
    json_schema = response_format.get("json_schema")
    if isinstance(json_schema, Mapping) and isinstance(json_schema.get("schema"), Mapping):
        return True, dict(json_schema["schema"])
    return True, None


def function_declarations(tools: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    declarations: List[Dict[str, Any]] = []
    for tool in tools or []:
        function = tool.get("function") if isinstance(tool, Mapping) else None
        if not isinstance(function, Mapping) or not function.get("name"):
            continue
        decl = {"name": function["name"]}
        for key in ("description", "parameters"):
            if function.get(key) is not None:
                decl[key] = function[key]
        declarations.append(decl)
    return declarations


def generation_config(request: ChatRequest) -> Dict[str, Any]:
    config: Dict[str, Any] = {}
    if request.temperature is not None:
        config["temperature"] = request.temperature
    max_tokens = request.max_tokens if request.max_tokens is not None else request.max_completion_tokens
    if max_tokens is not None:
        config["maxOutputTokens"] = max_tokens
    if request.top_p is not None:
        config["topP"] = request.top_p
    stops = [s for s in request.stop_list() if s]
    if stops:
        config["stopSequences"] = stops
    if request.seed is not None:
        config["seed"] = request.seed
    wants_json, schema = response_schema(request.response_format)
    if wants_json:
        config["responseMimeType"] = "application/json"
        if schema is not None:
            config["responseSchema"] = schema
    return config


async def build_generate_body(
    model: str, request: ChatRequest, fetch_media: Optional[FetchMedia] = None
) -> Dict[str, Any]:
    """Build the ``:generateContent`` JSON body."""
    system: List[Dict[str, Any]] = []
    rest: List[Message] = []
    for message in request.messages:
        if message.role == "system":
            system.extend(content_parts(message, model))
        else:
            rest.append(message)
    body: Dict[str, Any] = {"contents": await build_contents(rest, model, fetch_media)}
    if system:
        body["system_instruction"] = {"parts": system}
    config = generation_config(request)
    if config:
        body["generationConfig"] = config
    declarations = function_declarations(request.tools)
    if declarations:
        body["tools"] = [{"functionDeclarations": declarations}]
    body.update(request.extra)
    return body


def extract_text(payload: Mapping[str, Any]) -> str:
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], Mapping):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, Mapping) else None
    if not isinstance(parts, list):
        return ""
    return "".join(p["text"] for p in parts if isinstance(p, Mapping) and isinstance(p.get("text"), str))


def debug_enabled() -> bool:
    return os.getenv(GEMINI_DEBUG_ENV) == "1"


def parse_generate_response(payload: Mapping[str, Any]) -> ChatResponse:
    """Normalize a ``generateContent`` payload.

    The raw payload is attached only when ``LLM_BRIDGE_GEMINI_DEBUG=1``.
    """
    response_id = payload.get("responseId")
    return ChatResponse(
        content=extract_text(payload),
        usage=extract_gemini_usage(payload.get("usageMetadata") or {}),
        response_id=response_id if isinstance(response_id, str) else None,
        raw=dict(payload) if debug_enabled() else None,
    )


__all__ = [
    "GEMINI_DEBUG_ENV",
    "strip_model_prefix",
    "media_part",
    "inline_remote_media",
    "build_contents",
    "generation_config",
    "function_declarations",
    "build_generate_body",
    "extract_text",
    "debug_enabled",
    "parse_generate_response",
]
