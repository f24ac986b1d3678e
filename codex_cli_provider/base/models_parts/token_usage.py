"""
Token usage DTO.

Backends report usage as optional counters; the adapter normalizes them to
non-negative integers where a missing or unreadable counter counts as zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


def coerce_count(value: Any) -> int:
    """Return ``value`` as a non-negative int, or 0 when absent/invalid."""
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return count if count >= 0 else 0


@dataclass(frozen=True)
class TokenUsage:
    """Prompt/completion token counters for one backend call."""

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    @classmethod
    def from_counts(cls, prompt: Any, completion: Any) -> "TokenUsage":
        return cls(prompt_tokens=coerce_count(prompt), completion_tokens=coerce_count(completion))

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


__all__ = ["TokenUsage", "coerce_count"]
