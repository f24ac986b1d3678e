"""
Normalized adapter error kinds (taxonomy).

Defines the `ErrorKind` enumeration attached to every `ClassifiedError`. Values
are lowercase snake_case and are considered a stable public contract for
logging and for callers deciding whether to retry.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure categories surfaced by the adapter."""

    AUTHENTICATION = "authentication"
    TIMEOUT = "timeout"
    API_CALL = "api_call"
    SDK_NOT_INSTALLED = "sdk_not_installed"
    INVALID_MODEL = "invalid_model"


__all__ = ["ErrorKind"]
