"""Host prompt -> Codex CLI prompt conversion.

The CLI accepts one prompt string plus an optional system prompt, so the
role-tagged host conversation is flattened into labelled blocks:

    Human: ...

    Assistant: ...

    Tool Result: ...

Non-text parts are rendered as bracketed markers so the structure of the
conversation stays traceable in the prompt the CLI sees.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from ..base.models import ContentPart, Message

_ROLE_LABELS = {
    "user": "Human",
    "assistant": "Assistant",
    "tool": "Tool Result",
}

JSON_MODE_INSTRUCTION = (
    "Respond with a single valid JSON value only. "
    "Do not wrap it in Markdown code fences and do not add any commentary."
)


@dataclass(frozen=True)
class ConvertedPrompt:
    messages_prompt: str
    system_prompt: str


def _compact_json(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return str(value)


def _data(part: ContentPart) -> Mapping[str, Any]:
    return part.data if isinstance(part.data, Mapping) else {}


def _render_part(part: ContentPart) -> str:
    data = _data(part)
    if part.type == "text":
        return part.text or ""
    if part.type == "json":
        return _compact_json(part.data) if part.data is not None else (part.text or "")
    if part.type == "tool_call":
        name = data.get("tool_name") or data.get("name") or "unknown"
        return f"[Tool Call: {name}] {_compact_json(data.get('args', {}))}"
    if part.type == "tool_result":
        name = data.get("tool_name") or data.get("name") or "unknown"
        result = data.get("result", part.text)
        rendered = result if isinstance(result, str) else _compact_json(result)
        return f"[Tool Result: {name}] {rendered}"
    if part.type == "image":
        return f"[Image: {data.get('media_type') or 'unknown'}]"
    if part.type == "file":
        return f"[File: {data.get('name') or data.get('media_type') or 'unknown'}]"
    if part.text:
        return part.text
    return f"[{part.type}]"


def _render_foreign(part: Any) -> str:
    """Placeholder for a part that is not a ``ContentPart`` (e.g. a raw dict)."""
    if isinstance(part, str):
        return part
    kind = part.get("type") if isinstance(part, Mapping) else getattr(part, "type", None)
    return f"[{kind or 'unknown'}]"


def _render_content(content: Any) -> str:
    if isinstance(content, str):
        return content
    if content is None:
        return ""
    rendered = (_render_part(p) if isinstance(p, ContentPart) else _render_foreign(p) for p in content)
    return "\n".join(r for r in rendered if r)


def convert_to_codex_cli_messages(
    prompt: Optional[Iterable[Message]],
    *,
    json_mode: bool = False,
) -> ConvertedPrompt:
    """Flatten ``prompt`` into the CLI's prompt text and system prompt.

    System messages are collected (in order) into ``system_prompt``; every
    other message becomes one labelled block of the prompt body. The input is
    never modified. An empty prompt yields empty strings.
    """
    system_parts: List[str] = []
    blocks: List[str] = []
    for message in prompt or ():
        text = _render_content(message.content)
        if message.role == "system":
            if text:
                system_parts.append(text)
            continue
        label = _ROLE_LABELS.get(message.role, message.role.capitalize())
        blocks.append(f"{label}: {text}")

    if json_mode and blocks:
        blocks.append(JSON_MODE_INSTRUCTION)

    return ConvertedPrompt(
        messages_prompt="\n\n".join(blocks),
        system_prompt="\n\n".join(system_parts),
    )


__all__ = ["ConvertedPrompt", "JSON_MODE_INSTRUCTION", "convert_to_codex_cli_messages"]
