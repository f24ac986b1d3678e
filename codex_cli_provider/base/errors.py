"""Unified adapter error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``codex_cli_provider.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.classified_error import ClassifiedError
from .errors_parts.classification import (
    classify_exception,
    extract_error_metadata,
    is_cancellation,
)

__all__ = [
    "ErrorKind",
    "ClassifiedError",
    "classify_exception",
    "extract_error_metadata",
    "is_cancellation",
]
