"""
Typed content part model for multi-part host messages.

A host message's content is either a plain string or an ordered list of
`ContentPart` objects. Non-text parts (tool calls, tool results, images,
files) carry their payload in ``data``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal[
    "text",          # Plain text content
    "json",          # JSON payload carried in ``data``
    "tool_call",     # Tool invocation: data = {"tool_name", "args"}
    "tool_result",   # Tool output: data = {"tool_name", "result"}
    "image",         # Image reference: data = {"media_type", "url"}
    "file",          # File reference: data = {"name", "media_type"}
    "refusal",       # Refusal reason text
    "other",         # Catch-all
]


@dataclass
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the part, e.g. ``"text"`` or ``"tool_result"``.
        text: Optional textual content for human-readable parts.
        data: Optional payload for non-text parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the part."""
        return asdict(self)


__all__ = [
    "ContentPart",
    "ContentPartType",
]
