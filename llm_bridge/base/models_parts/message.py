"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content may be either plain text or a list of `ContentPart` objects.
Tool-calling fields (``tool_calls``, ``tool_call_id``, ``name``) follow the
OpenAI chat shape and are translated by adapters that understand them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from .content_part import ContentPart


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool", "function"]


@dataclass
class Message:
    """A chat message used by provider-agnostic DTOs.

    Attributes:
        role: The role of the message author.
        content: Either a plain text string or a list of `ContentPart` items.
        name: Optional author or function name.
        tool_call_id: Identifier of the tool call a ``"tool"`` message answers.
        tool_calls: Tool calls requested by an ``"assistant"`` message.
    """

    role: Role
    content: Union[str, List[ContentPart]]
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None

    def is_structured(self) -> bool:
        """Return True if the message content is a structured list of parts."""
        return isinstance(self.content, list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-style wire shape of the message."""
        out: Dict[str, Any] = {
            "role": self.role,
            "content": (
                self.content if isinstance(self.content, str)
                else [p.to_dict() for p in self.content]
            ),
        }
        if self.name is not None:
            out["name"] = self.name
        if self.tool_call_id is not None:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls is not None:
            out["tool_calls"] = self.tool_calls
        return out


__all__ = [
    "Message",
    "Role",
]
