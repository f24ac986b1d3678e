"""Streaming metrics data structures.

Collected per stream and attached to the ``stream.end`` log event.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models import TokenUsage


@dataclass
class StreamMetrics:
    """Collected metrics for a single streaming invocation.

    Fields:
      emitted: number of content chunks relayed
      time_to_first_token_ms: latency until the first content chunk
      total_duration_ms: latency until the terminal chunk (or failure)
      tokens: canonical ``{"prompt", "completion", "total"}`` mapping
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Any]] = None
    started_at: float = field(default_factory=lambda: time.perf_counter())

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000.0

    def record_delta(self) -> None:
        if self.emitted == 0:
            self.time_to_first_token_ms = self._elapsed_ms()
        self.emitted += 1

    def finish(self, usage: Optional[TokenUsage] = None) -> None:
        self.total_duration_ms = self._elapsed_ms()
        if usage is not None:
            apply_token_usage(self, usage)


def apply_token_usage(metrics: StreamMetrics, usage: TokenUsage) -> None:
    """Populate the canonical token mapping on a :class:`StreamMetrics` instance."""
    metrics.tokens = usage.to_dict()


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
]
