"""
Pydantic DTOs and validators for inbound chat requests.

Purpose
-------
Validate dict-shaped chat payloads (OpenAI chat schema) before they are
converted into the normalized :class:`~llm_bridge.base.models.ChatRequest`
dataclass that adapters consume. Roles, content-part tags and numeric bounds
are checked here so adapters can assume well-formed input.

External dependencies: Pydantic only (no network calls). No timeouts.

Fallback semantics: Not applicable. Validation either succeeds or raises a
`pydantic.ValidationError`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models_parts.chat_request import ChatRequest
from ..models_parts.content_part import ContentPart, FileRef, ImageUrl, InputAudio
from ..models_parts.message import Message


Role = Literal["system", "user", "assistant", "tool", "function"]


class ImageUrlDTO(BaseModel):
    url: str = Field(..., min_length=1)
    detail: Optional[str] = None
    format: Optional[str] = None


class InputAudioDTO(BaseModel):
    data: str = Field(..., min_length=1)
    format: str = Field(..., min_length=1)


class FileDTO(BaseModel):
    file_id: Optional[str] = None
    file_data: Optional[str] = None
    format: Optional[str] = None
    detail: Optional[str] = None

    @model_validator(mode="after")
    def _require_reference(self) -> "FileDTO":
        if not self.file_id and not self.file_data:
            raise ValueError("file part requires file_id or file_data")
        return self


class ContentPartDTO(BaseModel):
    """A tagged content part; the payload field must match ``type``."""

    type: Literal["text", "image_url", "input_audio", "file"]
    text: Optional[str] = None
    image_url: Optional[ImageUrlDTO] = None
    input_audio: Optional[InputAudioDTO] = None
    file: Optional[FileDTO] = None

    @model_validator(mode="after")
    def _payload_matches_tag(self) -> "ContentPartDTO":
        payload = {
            "text": self.text,
            "image_url": self.image_url,
            "input_audio": self.input_audio,
            "file": self.file,
        }[self.type]
        if payload is None:
            raise ValueError(f"content part of type '{self.type}' requires a '{self.type}' field")
        return self

    def to_part(self) -> ContentPart:
        if self.type == "text":
            return ContentPart.from_text(self.text or "")
        if self.type == "image_url" and self.image_url is not None:
            return ContentPart(type="image_url", image_url=ImageUrl(**self.image_url.model_dump()))
        if self.type == "input_audio" and self.input_audio is not None:
            return ContentPart(type="input_audio", input_audio=InputAudio(**self.input_audio.model_dump()))
        return ContentPart(type="file", file=FileRef(**self.file.model_dump()))  # type: ignore[union-attr]


class MessageDTO(BaseModel):
    """Represents a chat message with either a text string or structured parts.

    Rules:
        - `content` may be empty only for assistant messages carrying tool calls.
        - A list of parts must be non-empty.
    """

    role: Role
    content: Union[str, List[ContentPartDTO], None] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        if self.content is None or self.content == "":
            if self.role == "assistant" and self.tool_calls:
                return self
            raise ValueError("message content must be non-empty")
        if isinstance(self.content, list) and not self.content:
            raise ValueError("content parts must be a non-empty list")
        return self

    def to_message(self) -> Message:
        content: Union[str, List[ContentPart]]
        if isinstance(self.content, list):
            content = [p.to_part() for p in self.content]
        else:
            content = self.content or ""
        return Message(
            role=self.role,
            content=content,
            name=self.name,
            tool_call_id=self.tool_call_id,
            tool_calls=self.tool_calls,
        )


class ChatRequestDTO(BaseModel):
    """Validated chat request.

    Parameters:
        model: Target model string (non-empty, optionally ``provider/model``).
        messages: Ordered, non-empty list of MessageDTO.
        max_tokens / max_completion_tokens: Positive when provided.
        temperature: Within [0.0, 2.0] when provided.
        top_p: Within [0.0, 1.0] when provided.
        Remaining fields mirror :class:`~llm_bridge.base.models.ChatRequest`.
        Unknown top-level keys are collected into ``extra``.

    Raises:
        ValidationError: On invalid roles, empty content, or out-of-range params.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    max_completion_tokens: Optional[int] = Field(default=None, gt=0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    stop: Optional[Union[str, List[str]]] = None
    seed: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    user: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    response_format: Optional[Dict[str, Any]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Any] = None
    parallel_tool_calls: Optional[bool] = None
    reasoning_effort: Optional[str] = None
    thinking: Optional[Dict[str, Any]] = None

    def to_request(self) -> ChatRequest:
        """Convert into the normalized dataclass consumed by adapters."""
        fields = self.model_dump(exclude={"messages"}, exclude_none=False)
        extra = dict(self.model_extra or {})
        for key in extra:
            fields.pop(key, None)
        return ChatRequest(
            messages=[m.to_message() for m in self.messages],
            extra=extra,
            **fields,
        )


__all__ = [
    "Role",
    "ImageUrlDTO",
    "InputAudioDTO",
    "FileDTO",
    "ContentPartDTO",
    "MessageDTO",
    "ChatRequestDTO",
]
