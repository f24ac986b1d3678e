"""StreamController: cancellable async iterator over stream chunks.

Wraps the adapter's relay generator so the host can iterate chunks, cancel
the underlying backend call, and inspect the terminal chunk afterwards.
Closing the controller closes the relay generator, whose cleanup trips the
backend abort signal when the stream had not finished.
"""
from __future__ import annotations

from contextlib import suppress
from typing import AsyncGenerator, List, Optional

from ..cancellation import CancellationToken
from ..models import UnsupportedWarning
from .streaming import ChatStreamEvent


class StreamController:
    """High-level cancellable async iterator.

    Responsibilities:
      * Iterate over `ChatStreamEvent` objects (``async for``).
      * Expose `cancel(reason)` which trips the backend abort signal.
      * Track the terminal chunk for post-hoc inspection.
      * Release the backend on ``aclose()`` / ``async with`` exit.
    """

    def __init__(
        self,
        source: AsyncGenerator[ChatStreamEvent, None],
        token: CancellationToken,
        *,
        warnings: Optional[List[UnsupportedWarning]] = None,
    ) -> None:
        self._source = source
        self._token = token
        self.warnings: List[UnsupportedWarning] = list(warnings or [])
        self._finished = False
        self._closed = False
        self._terminal_event: ChatStreamEvent | None = None

    def __aiter__(self) -> "StreamController":
        return self

    async def __anext__(self) -> ChatStreamEvent:
        if self._closed:
            raise StopAsyncIteration
        evt = await self._source.__anext__()
        if evt.finish:
            self._finished = True
            self._terminal_event = evt
        return evt

    async def __aenter__(self) -> "StreamController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # API -----------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation of the underlying backend call.

        Safe to invoke multiple times or after completion.
        """
        with suppress(Exception):
            self._token.cancel(reason or "stream cancelled by caller")

    async def aclose(self) -> None:
        """Stop consuming and release the backend; idempotent."""
        if self._closed:
            return
        self._closed = True
        if not self._finished:
            self.cancel("stream closed before completion")
        await self._source.aclose()

    @property
    def token(self) -> CancellationToken:
        """Abort signal shared with the backend for this stream."""
        return self._token

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the stream has emitted its terminal chunk."""
        return self._finished

    @property
    def terminal_event(self) -> ChatStreamEvent | None:  # noqa: D401 - short property
        """Return the captured terminal chunk if iteration has completed."""
        return self._terminal_event


__all__ = ["StreamController"]
