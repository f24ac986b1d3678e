"""Streaming package for the adapter.

Exposes stream chunks, the cancellable controller and per-stream metrics
under a single namespace.
"""

from .streaming import ChatStreamEvent, accumulate_events
from .streaming_metrics import StreamMetrics, apply_token_usage
from .stream_controller import StreamController

__all__ = [
    "ChatStreamEvent",
    "accumulate_events",
    "StreamMetrics",
    "apply_token_usage",
    "StreamController",
]
