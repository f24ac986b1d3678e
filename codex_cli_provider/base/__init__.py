"""
Adapter base package.

Exports the backend-agnostic building blocks the codex-cli adapter is composed
from:
- Interfaces: host-facing model and provider contracts
- Models (DTOs): prompts, requests, results, usage, warnings
- Errors: classified error taxonomy
- Cancellation and streaming primitives
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ClassifiedError, ErrorKind, classify_exception
from .interfaces import LanguageModel, ModelProvider
from .models import (
    ContentPart,
    ContentPartType,
    GenerateRequest,
    GenerateResult,
    Message,
    Role,
    TokenUsage,
    UnsupportedWarning,
)
from .streaming import ChatStreamEvent, StreamController, StreamMetrics, accumulate_events

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ClassifiedError",
    "ErrorKind",
    "classify_exception",
    "LanguageModel",
    "ModelProvider",
    "ContentPart",
    "ContentPartType",
    "GenerateRequest",
    "GenerateResult",
    "Message",
    "Role",
    "TokenUsage",
    "UnsupportedWarning",
    "ChatStreamEvent",
    "StreamController",
    "StreamMetrics",
    "accumulate_events",
]
