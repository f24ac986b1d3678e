"""Codex CLI error constructors and classification.

Every failure the adapter surfaces is a ``ClassifiedError`` built here, so the
message wording and metadata layout stay consistent across ``do_generate``,
``do_stream`` and model construction.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Type

from ..base.errors import (
    ClassifiedError,
    ErrorKind,
    classify_exception,
    extract_error_metadata,
    is_cancellation,
)
from ..config.defaults import CODEX_CLI_PROVIDER_ID
from .backend_events import ErrorSignal, ResultEvent

SDK_NOT_INSTALLED_MESSAGE = (
    "Codex CLI SDK is not installed. "
    "Please install '@openai/codex-cli' to use the codex-cli provider."
)

CANCELLED_MESSAGE = "Codex CLI request was cancelled"

_PROMPT_EXCERPT_LIMIT = 200


class BackendSignalError(RuntimeError):
    """In-band backend error record raised as an exception for classification."""

    def __init__(self, signal: ErrorSignal) -> None:
        super().__init__(signal.message)
        self.code = signal.code
        self.exit_code = signal.exit_code
        self.stderr = signal.stderr


class BackendResultError(RuntimeError):
    """Result record flagged ``is_error``, raised so the classifier picks its kind.

    The result subtype is exposed as ``code`` so it lands in the error metadata.
    """

    def __init__(self, result: ResultEvent) -> None:
        super().__init__(
            result.result_text or f"Codex CLI returned an error result ({result.subtype or 'unknown'})"
        )
        self.code = result.subtype


def _metadata(
    cause: Optional[BaseException],
    *,
    prompt: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = extract_error_metadata(cause) if cause is not None else {}
    if prompt:
        meta["prompt_excerpt"] = prompt[:_PROMPT_EXCERPT_LIMIT]
    if extra:
        meta.update({k: v for k, v in extra.items() if v is not None})
    return meta


def _build(
    kind: ErrorKind,
    message: str,
    *,
    cause: Optional[BaseException] = None,
    model_id: Optional[str] = None,
    operation: Optional[str] = None,
    prompt: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> ClassifiedError:
    return ClassifiedError(
        kind=kind,
        message=message,
        provider=CODEX_CLI_PROVIDER_ID,
        model_id=model_id,
        operation=operation,
        metadata=_metadata(cause, prompt=prompt, extra=metadata),
        cause=cause,
    )


def create_api_call_error(message: str, **kwargs: Any) -> ClassifiedError:
    return _build(ErrorKind.API_CALL, message, **kwargs)


def create_authentication_error(message: str, **kwargs: Any) -> ClassifiedError:
    return _build(ErrorKind.AUTHENTICATION, message, **kwargs)


def create_timeout_error(message: str, **kwargs: Any) -> ClassifiedError:
    return _build(ErrorKind.TIMEOUT, message, **kwargs)


def create_sdk_not_installed_error(**kwargs: Any) -> ClassifiedError:
    """Build the not-installed error; the message wording is fixed."""
    return _build(ErrorKind.SDK_NOT_INSTALLED, SDK_NOT_INSTALLED_MESSAGE, **kwargs)


def create_invalid_model_error(model_id: Any) -> ClassifiedError:
    """Build the construction-time error for an empty or missing model id.

    The offending value is embedded in its JSON rendering so empty strings and
    ``None`` stay distinguishable (``""`` vs ``null``).
    """
    rendered = json.dumps(model_id, default=str)
    return _build(
        ErrorKind.INVALID_MODEL,
        f"No such model: {rendered}",
        model_id=model_id if isinstance(model_id, str) else None,
        operation="construct",
        metadata={"model_id": rendered},
    )


def is_authentication_error(error: BaseException) -> bool:
    return isinstance(error, ClassifiedError) and error.kind is ErrorKind.AUTHENTICATION


def is_timeout_error(error: BaseException) -> bool:
    return isinstance(error, ClassifiedError) and error.kind is ErrorKind.TIMEOUT


def get_error_metadata(error: BaseException) -> Dict[str, Any]:
    """Return diagnostic metadata for any error (empty dict when none)."""
    if isinstance(error, ClassifiedError):
        return dict(error.metadata)
    return extract_error_metadata(error)


def classify_backend_error(
    exc: BaseException,
    *,
    model_id: Optional[str] = None,
    operation: Optional[str] = None,
    prompt: Optional[str] = None,
    abort_error: Optional[Type[BaseException]] = None,
) -> ClassifiedError:
    """Map an exception raised while talking to the backend onto a ClassifiedError.

    Already classified errors pass through untouched. Cancellations get a
    fixed message; other kinds keep the backend's own message so the caller
    sees what the CLI reported.
    """
    if isinstance(exc, ClassifiedError):
        return exc
    kind = classify_exception(exc, abort_error=abort_error)
    if is_cancellation(exc, abort_error):
        message = CANCELLED_MESSAGE
    else:
        message = str(exc) or type(exc).__name__
    return _build(kind, message, cause=exc, model_id=model_id, operation=operation, prompt=prompt)


__all__ = [
    "SDK_NOT_INSTALLED_MESSAGE",
    "CANCELLED_MESSAGE",
    "BackendResultError",
    "BackendSignalError",
    "create_api_call_error",
    "create_authentication_error",
    "create_timeout_error",
    "create_sdk_not_installed_error",
    "create_invalid_model_error",
    "is_authentication_error",
    "is_timeout_error",
    "get_error_metadata",
    "classify_backend_error",
]
