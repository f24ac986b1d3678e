"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `codex_cli_provider.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .classified_error import ClassifiedError
from .classification import classify_exception, extract_error_metadata, is_cancellation

__all__ = [
    "ErrorKind",
    "ClassifiedError",
    "classify_exception",
    "extract_error_metadata",
    "is_cancellation",
]
