"""
Typed content parts for multimodal chat messages.

A message's content is either plain text or an ordered list of
:class:`ContentPart` values. Ordering is preserved end to end because vendors
render multimodal parts positionally. The ``type`` tag selects which payload
field is populated:

- ``"text"``: ``text``
- ``"image_url"``: ``image_url`` (:class:`ImageUrl`)
- ``"input_audio"``: ``input_audio`` (:class:`InputAudio`)
- ``"file"``: ``file`` (:class:`FileRef`)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal["text", "image_url", "input_audio", "file"]


@dataclass
class ImageUrl:
    """Image reference: remote URL, ``gs://`` URI or ``data:`` URL."""

    url: str
    detail: Optional[str] = None
    format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"url": self.url}
        if self.detail is not None:
            out["detail"] = self.detail
        if self.format is not None:
            out["format"] = self.format
        return out


@dataclass
class InputAudio:
    """Base64 audio payload with its container format (``wav``, ``mp3``)."""

    data: str
    format: str

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "format": self.format}


@dataclass
class FileRef:
    """File reference by uploaded id, inline data, or URL.

    ``file_data`` may be a ``data:`` URL or a remote URI; ``format`` is a MIME
    type hint.
    """

    file_id: Optional[str] = None
    file_data: Optional[str] = None
    format: Optional[str] = None
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            k: v
            for k, v in (
                ("file_id", self.file_id),
                ("file_data", self.file_data),
                ("format", self.format),
                ("detail", self.detail),
            )
            if v is not None
        }


@dataclass
class ContentPart:
    """A single tagged piece of message content.

    Attributes:
        type: Tag selecting the populated payload field.
        text: Text for ``"text"`` parts.
        image_url: Image reference for ``"image_url"`` parts.
        input_audio: Audio payload for ``"input_audio"`` parts.
        file: File reference for ``"file"`` parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    image_url: Optional[ImageUrl] = None
    input_audio: Optional[InputAudio] = None
    file: Optional[FileRef] = None

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def from_image(cls, url: str, detail: Optional[str] = None, format: Optional[str] = None) -> "ContentPart":
        return cls(type="image_url", image_url=ImageUrl(url=url, detail=detail, format=format))

    @classmethod
    def from_audio(cls, data: str, format: str) -> "ContentPart":
        return cls(type="input_audio", input_audio=InputAudio(data=data, format=format))

    @classmethod
    def from_file(cls, **kwargs: Any) -> "ContentPart":
        return cls(type="file", file=FileRef(**kwargs))

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-style wire shape of this part."""
        if self.type == "text":
            return {"type": "text", "text": self.text or ""}
        if self.type == "image_url" and self.image_url is not None:
            return {"type": "image_url", "image_url": self.image_url.to_dict()}
        if self.type == "input_audio" and self.input_audio is not None:
            return {"type": "input_audio", "input_audio": self.input_audio.to_dict()}
        if self.type == "file" and self.file is not None:
            return {"type": "file", "file": self.file.to_dict()}
        return {"type": self.type}


__all__ = [
    "ContentPart",
    "ContentPartType",
    "ImageUrl",
    "InputAudio",
    "FileRef",
]
