"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` carries a caller's abort request into the backend (as
its ``abort_signal`` option) and across stream controllers; ``CancelledError``
is raised by operations that observe a cancelled token.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
