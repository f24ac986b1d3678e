"""Cancellation error type.

Defines the public ``CancelledError`` raised when a caller-owned
``CancellationToken`` is observed as cancelled.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from ``asyncio.CancelledError`` so that caller-requested aborts
    can be classified without interfering with task cancellation semantics.
    """

__all__ = ["CancelledError"]
