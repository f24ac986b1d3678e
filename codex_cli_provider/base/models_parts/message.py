"""
Message DTO for host prompts.

Defines the `Message` dataclass and the `Role` literal. A host prompt is an
ordered list of messages and is treated as read-only by the adapter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Union

from .content_part import ContentPart


Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class Message:
    """A role-tagged host message.

    Attributes:
        role: ``"system"``, ``"user"``, ``"assistant"`` or ``"tool"``.
        content: Plain text, or an ordered list of `ContentPart` items.
    """

    role: Role
    content: Union[str, List[ContentPart]]

    def is_structured(self) -> bool:
        """Return True if the message content is a list of parts."""
        return isinstance(self.content, list)

    def text_or_joined(self) -> str:
        """Return a flattened text view of the message.

        Text parts are joined with newlines; parts without text appear as a
        bracketed type token so their position stays visible.
        """
        if isinstance(self.content, str):
            return self.content
        parts: List[str] = []
        for p in self.content:
            if p.text:
                parts.append(p.text)
            else:
                parts.append(f"[{p.type}]")
        return "\n".join(parts)


__all__ = [
    "Message",
    "Role",
]
