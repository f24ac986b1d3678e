"""
Error classification helpers mapping exceptions to normalized ErrorKind values.

Implements exit-code/status extraction, code-attribute matching, and
message-based heuristics as a fallback, since CLI-driven backends report most
failures as plain exceptions carrying stderr text.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Tuple, Type

from ..cancellation import CancelledError
from .classified_error import ClassifiedError
from .error_kind import ErrorKind

_STDERR_LIMIT = 2000


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract a numeric status from a backend exception.

    Supported attribute shapes (checked in order):
    - ``exc.exit_code`` / ``exc.exitCode`` (CLI process exit status)
    - ``exc.status_code`` / ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no integer status can be found.
    """
    for attr in ("exit_code", "exitCode", "status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and not isinstance(val, bool):
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int):
            return sc
    return None


def _extract_code(exc: BaseException) -> Optional[str]:
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code:
        return code
    return None


_AUTH_STATUSES = frozenset({401, 403})

_TIMEOUT_CODES = frozenset({"ETIMEDOUT", "TIMEOUT", "DEADLINE_EXCEEDED"})

_AUTH_PHRASES: Tuple[str, ...] = (
    "not authenticated",
    "authentication",
    "unauthorized",
    "auth failed",
    "please login",
    "login required",
    "invalid api key",
    "api key",
)

_TIMEOUT_PHRASES: Tuple[str, ...] = (
    "timeout",
    "timed out",
    "deadline exceeded",
)


def is_cancellation(exc: BaseException, abort_error: Optional[Type[BaseException]] = None) -> bool:
    """Return True when ``exc`` signals a cancelled/aborted operation."""
    if abort_error is not None and isinstance(exc, abort_error):
        return True
    return isinstance(exc, (CancelledError, asyncio.CancelledError))


def classify_exception(
    exc: BaseException,
    *,
    abort_error: Optional[Type[BaseException]] = None,
) -> ErrorKind:
    """Classify an exception into a normalized :class:`ErrorKind`.

    Precedence:
        1. ClassifiedError passthrough.
        2. Cancellation (backend abort type or cooperative cancellation).
        3. Timeout exceptions and timeout error codes.
        4. Auth exit code / status.
        5. Message heuristics (timeout first, then auth).
        6. ``API_CALL`` fallback.
    """
    if isinstance(exc, ClassifiedError):
        return exc.kind
    if is_cancellation(exc, abort_error):
        return ErrorKind.TIMEOUT
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorKind.TIMEOUT
    code = _extract_code(exc)
    if code is not None and code.upper() in _TIMEOUT_CODES:
        return ErrorKind.TIMEOUT
    if _extract_status(exc) in _AUTH_STATUSES:
        return ErrorKind.AUTHENTICATION
    msg = str(exc).lower()
    if any(p in msg for p in _TIMEOUT_PHRASES):
        return ErrorKind.TIMEOUT
    if any(p in msg for p in _AUTH_PHRASES):
        return ErrorKind.AUTHENTICATION
    return ErrorKind.API_CALL


def extract_error_metadata(exc: BaseException) -> Dict[str, Any]:
    """Collect diagnostic fields exposed by backend exceptions.

    Only attributes that are present are included; ``stderr`` is truncated to
    keep log lines bounded.
    """
    meta: Dict[str, Any] = {"error_type": type(exc).__name__}
    if (code := _extract_code(exc)) is not None:
        meta["code"] = code
    if (status := _extract_status(exc)) is not None:
        meta["exit_code"] = status
    stderr = getattr(exc, "stderr", None)
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    if isinstance(stderr, str) and stderr:
        meta["stderr"] = stderr[:_STDERR_LIMIT]
    return meta


__all__ = [
    "classify_exception",
    "extract_error_metadata",
    "is_cancellation",
    "_extract_status",
]
