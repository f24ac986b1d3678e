"""Streaming primitives for the adapter.

Keeps streaming concerns separate from the request/response DTOs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..models import GenerateResult, TokenUsage


@dataclass(frozen=True)
class ChatStreamEvent:
    """One chunk relayed to the host while streaming.

    Fields:
      provider: canonical provider name
      model: model id the adapter was constructed with
      delta: text delta for content chunks, ``None`` on the terminal chunk
      finish: True only on the terminal chunk
      usage: token counters, set on the terminal chunk
      finish_reason: completion status, set on the terminal chunk
    """

    provider: str
    model: str
    delta: Optional[str]
    finish: bool = False
    usage: Optional[TokenUsage] = None
    finish_reason: Optional[str] = None


def accumulate_events(events: Iterable[ChatStreamEvent]) -> GenerateResult:
    """Fold a complete chunk sequence into a :class:`GenerateResult`.

    Concatenates content deltas in order and takes usage and finish reason
    from the terminal chunk. A sequence without a terminal chunk yields zero
    usage and ``finish_reason="unknown"``.
    """
    text_parts: List[str] = []
    terminal: Optional[ChatStreamEvent] = None
    for evt in events:
        if evt.finish:
            terminal = evt
        elif evt.delta:
            text_parts.append(evt.delta)
    usage = terminal.usage if terminal is not None and terminal.usage is not None else TokenUsage()
    finish_reason = (terminal.finish_reason if terminal is not None else None) or "unknown"
    return GenerateResult(text="".join(text_parts), usage=usage, finish_reason=finish_reason)


__all__ = [
    "ChatStreamEvent",
    "accumulate_events",
]
