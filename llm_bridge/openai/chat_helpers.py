"""OpenAI-compatible request/response translation.

Pure helpers (no I/O) used by :class:`~llm_bridge.openai.client.OpenAICompatAdapter`
for chat completions, embeddings and image generation. They work for any
vendor speaking the OpenAI wire format (OpenAI, OpenRouter, xAI, LiteLLM
proxies, local gateways).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import httpx

from ..base.constants import RESPONSE_COST_HEADER
from ..base.errors import ErrorCode, ProviderError
from ..base.models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    GeneratedImage,
    ImageRequest,
    Usage,
)
from ..base.tokens import extract_openai_usage, parse_cost

# Optional ChatRequest fields forwarded verbatim when set.
CHAT_OPTIONAL_FIELDS = (
    "temperature",
    "max_tokens",
    "max_completion_tokens",
    "response_format",
    "tools",
    "tool_choice",
    "parallel_tool_calls",
    "stop",
    "top_p",
    "presence_penalty",
    "frequency_penalty",
    "seed",
    "user",
    "metadata",
    "reasoning_effort",
    "thinking",
)


def build_chat_body(model: str, request: ChatRequest, *, stream: bool = False) -> Dict[str, Any]:
    """Return the ``/chat/completions`` JSON body for ``request``."""
    body: Dict[str, Any] = {
        "model": model,
        "messages": [m.to_dict() for m in request.messages],
    }
    for name in CHAT_OPTIONAL_FIELDS:
        value = getattr(request, name)
        if value is not None:
            body[name] = value
    if stream:
        body["stream"] = True
    body.update(request.extra)
    return body


def extract_text(payload: Mapping[str, Any]) -> str:
    """Return ``choices[0].message.content`` or ``""`` when absent.

    Some compatible gateways return content as a list of text parts; those
    are concatenated.
    """
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], Mapping):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, Mapping):
        return ""
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            p.get("text", "") for p in content
            if isinstance(p, Mapping) and p.get("type") == "text" and isinstance(p.get("text"), str)
        )
    return ""


def header_cost(response: httpx.Response) -> Optional[float]:
    return parse_cost(response.headers.get(RESPONSE_COST_HEADER))


def parse_chat_response(payload: Mapping[str, Any], response: httpx.Response) -> ChatResponse:
    """Normalize a chat completion payload.

    Usage cost prefers the body's ``usage.cost`` and falls back to the
    gateway cost header, which is also reported separately as ``header_cost``.
    """
    usage = extract_openai_usage(payload.get("usage") or {})
    cost_from_header = header_cost(response)
    if usage.cost_usd is None and cost_from_header is not None:
        usage.cost_usd = cost_from_header
    response_id = payload.get("id")
    return ChatResponse(
        content=extract_text(payload),
        usage=usage,
        response_id=response_id if isinstance(response_id, str) else None,
        header_cost=cost_from_header,
        raw=payload,
    )


def build_embedding_body(model: str, request: EmbeddingRequest) -> Dict[str, Any]:
    return {"model": model, "input": request.input}


def parse_embedding_vectors(payload: Mapping[str, Any], *, provider: str, model: str) -> List[List[float]]:
    """Return ``data[].embedding`` ordered by ``index`` when present."""
    data = payload.get("data")
    if not isinstance(data, list):
        raise ProviderError(
            code=ErrorCode.PARSE,
            message="embedding response missing 'data' list",
            provider=provider,
            model=model,
        )
    entries = [d for d in data if isinstance(d, Mapping)]
    entries.sort(key=lambda d: d.get("index", 0) if isinstance(d.get("index"), int) else 0)
    vectors: List[List[float]] = []
    for entry in entries:
        embedding = entry.get("embedding")
        if not isinstance(embedding, list):
            raise ProviderError(
                code=ErrorCode.PARSE,
                message="embedding entry missing numeric 'embedding' list",
                provider=provider,
                model=model,
            )
        try:
            vectors.append([float(x) for x in embedding])
        except (TypeError, ValueError) as exc:
            raise ProviderError(
                code=ErrorCode.PARSE,
                message="embedding entry contains non-numeric values",
                provider=provider,
                model=model,
                raw=exc,
            ) from exc
    return vectors


def build_image_body(model: str, request: ImageRequest) -> Dict[str, Any]:
    body: Dict[str, Any] = {"model": model, "prompt": request.prompt}
    for name in ("n", "size", "quality", "background"):
        value = getattr(request, name)
        if value is not None:
            body[name] = value
    return body


def parse_images(payload: Mapping[str, Any]) -> List[GeneratedImage]:
    data = payload.get("data")
    if not isinstance(data, list):
        return []
    images: List[GeneratedImage] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        images.append(
            GeneratedImage(
                b64_json=entry.get("b64_json"),
                url=entry.get("url"),
                revised_prompt=entry.get("revised_prompt"),
            )
        )
    return images


def parse_image_usage(payload: Mapping[str, Any]) -> Usage:
    """Image endpoints report ``input_tokens``/``output_tokens`` naming."""
    raw = payload.get("usage")
    if not isinstance(raw, Mapping):
        return Usage()
    usage = extract_openai_usage(raw)
    if usage.prompt_tokens is None and usage.completion_tokens is None:
        alt = extract_openai_usage(
            {
                "prompt_tokens": raw.get("input_tokens"),
                "completion_tokens": raw.get("output_tokens"),
                "total_tokens": raw.get("total_tokens"),
                "cost": raw.get("cost"),
            }
        )
        return alt
    return usage


__all__ = [
    "CHAT_OPTIONAL_FIELDS",
    "build_chat_body",
    "extract_text",
    "header_cost",
    "parse_chat_response",
    "build_embedding_body",
    "parse_embedding_vectors",
    "build_image_body",
    "parse_images",
    "parse_image_usage",
]
