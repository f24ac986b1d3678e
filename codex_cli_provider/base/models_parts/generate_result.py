"""
GenerateResult DTO returned by single-shot generation.

``provider_metadata`` holds backend-reported diagnostics (session id, cost,
duration) when present; ``raw_call`` records what was sent to the backend.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .token_usage import TokenUsage
from .unsupported_warning import UnsupportedWarning


@dataclass
class GenerateResult:
    """Finished single-shot generation."""

    text: str
    usage: TokenUsage
    warnings: List[UnsupportedWarning] = field(default_factory=list)
    finish_reason: str = "stop"
    provider_metadata: Dict[str, Any] = field(default_factory=dict)
    raw_call: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view (``raw_call`` excluded)."""
        return {
            "text": self.text,
            "usage": {
                "prompt_tokens": self.usage.prompt_tokens,
                "completion_tokens": self.usage.completion_tokens,
            },
            "warnings": [w.to_dict() for w in self.warnings],
            "finish_reason": self.finish_reason,
            "provider_metadata": dict(self.provider_metadata),
        }


__all__ = ["GenerateResult"]
