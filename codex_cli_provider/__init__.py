"""codex_cli_provider package

Exposes the Codex CLI as a language-model provider behind a uniform,
backend-agnostic contract.

Purpose:
    Let a host application generate or stream text through the optional
    Codex CLI SDK without importing it eagerly. A missing SDK surfaces as a
    classified error with fixed wording on first use.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`ClassifiedError`, :class:`ErrorKind`
    - Model and provider: :class:`CodexCliLanguageModel`,
      :class:`CodexCliProvider`, :func:`create_codex_cli`, ``codex_cli``
    - DTOs: :class:`Message`, :class:`ContentPart`, :class:`GenerateRequest`,
      :class:`GenerateResult`, :class:`TokenUsage`, :class:`UnsupportedWarning`
    - Streaming and cancellation: :class:`ChatStreamEvent`,
      :class:`StreamController`, :class:`CancellationToken`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ClassifiedError, ErrorKind
from .base.interfaces import LanguageModel, ModelProvider
from .base.models import (
    ContentPart,
    GenerateRequest,
    GenerateResult,
    Message,
    TokenUsage,
    UnsupportedWarning,
)
from .base.streaming import ChatStreamEvent, StreamController, accumulate_events
from .codex_cli import (
    SDK_NOT_INSTALLED_MESSAGE,
    CodexCliClient,
    CodexCliLanguageModel,
    CodexCliProvider,
    codex_cli,
    create_codex_cli,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ClassifiedError",
    "ErrorKind",
    "SDK_NOT_INSTALLED_MESSAGE",
    "CancellationToken",
    "CancelledError",
    "LanguageModel",
    "ModelProvider",
    "ContentPart",
    "GenerateRequest",
    "GenerateResult",
    "Message",
    "TokenUsage",
    "UnsupportedWarning",
    "ChatStreamEvent",
    "StreamController",
    "accumulate_events",
    "CodexCliClient",
    "CodexCliLanguageModel",
    "CodexCliProvider",
    "codex_cli",
    "create_codex_cli",
]
