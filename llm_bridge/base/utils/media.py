"""Media reference helpers shared by the multimodal adapters.

Pure functions (no I/O): ``data:`` URL parsing and building, MIME type
guessing from URLs and short format names.
"""
from __future__ import annotations

import base64
import mimetypes
from typing import NamedTuple, Optional
from urllib.parse import urlparse


class DataUrl(NamedTuple):
    mime_type: str
    data: str  # base64 payload


def parse_data_url(url: str) -> Optional[DataUrl]:
    """Parse a base64 ``data:`` URL into ``(mime_type, base64_data)``.

    Returns ``None`` for anything that is not a base64 data URL.
    """
    if not url.startswith("data:"):
        return None
    header, sep, payload = url[5:].partition(",")
    if not sep:
        return None
    params = header.split(";")
    if "base64" not in params[1:]:
        return None
    mime = params[0] or "application/octet-stream"
    return DataUrl(mime_type=mime, data=payload)


def build_data_url(content: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def url_scheme(url: str) -> str:
    return urlparse(url).scheme.lower()


def guess_mime_type(url: str, fallback: str = "application/octet-stream") -> str:
    """Guess a MIME type from the URL path extension."""
    path = urlparse(url).path
    guessed, _ = mimetypes.guess_type(path)
    return guessed or fallback


def normalize_mime(fmt: Optional[str], family: str) -> Optional[str]:
    """Turn a short format (``"wav"``) into ``"<family>/wav"``; pass MIME types through."""
    if not fmt:
        return None
    return fmt if "/" in fmt else f"{family}/{fmt}"


__all__ = [
    "DataUrl",
    "parse_data_url",
    "build_data_url",
    "url_scheme",
    "guess_mime_type",
    "normalize_mime",
]
