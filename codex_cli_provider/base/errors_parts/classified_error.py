"""
Structured classified error exception type.

Wraps backend failures with a normalized `ErrorKind` so callers can match on a
stable category instead of backend-specific exception classes or messages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .error_kind import ErrorKind


@dataclass(eq=False)
class ClassifiedError(Exception):
    """Represents a backend or adapter failure with a normalized kind.

    Attributes:
        kind: Normalized :class:`ErrorKind` classification for the failure.
        message: Human-readable message; ``str(error)`` returns it verbatim.
        provider: Provider key where the error originated (``"codex-cli"``).
        model_id: Model identifier associated with the failure, when known.
        operation: Adapter operation that failed (``"do_generate"``, ...).
        metadata: Diagnostic fields (exit code, stderr excerpt, error code).
        cause: Original exception, also chained as ``__cause__`` when raised.

    Instances are built once at the failure boundary and are not modified
    afterwards.
    """

    kind: ErrorKind
    message: str
    provider: str = "codex-cli"
    model_id: Optional[str] = None
    operation: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @property
    def retryable(self) -> bool:
        """Hint for upstream retry logic; only bounded-wait failures qualify."""
        return self.kind is ErrorKind.TIMEOUT

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view for structured logging."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "provider": self.provider,
            "model_id": self.model_id,
            "operation": self.operation,
            "metadata": dict(self.metadata),
            "cause": repr(self.cause) if self.cause is not None else None,
        }


__all__ = ["ClassifiedError"]
