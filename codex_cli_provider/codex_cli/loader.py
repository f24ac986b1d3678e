"""Lazy, memoized loader for the optional Codex CLI SDK.

Purpose:
    Import the backend SDK on first use instead of at package import time, and
    remember the outcome for the life of the process. A missing SDK is a
    permanent condition: later calls fail fast with the not-installed error
    without touching the import machinery again.

External dependencies:
    - Standard library only (``importlib``). The SDK module itself is optional
      and resolved by name (``codex_cli_sdk`` unless configured otherwise).

Thread-safety:
    The one-time transition out of ``UNATTEMPTED`` is guarded by a lock with a
    double check, so concurrent first callers (threads or tasks sharing a
    loop) perform at most one import and all observe the same terminal state.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from importlib import import_module
from types import ModuleType
from typing import Any, Callable, Optional, Type

from ..base.logging import LogContext, get_logger, normalized_log_event
from ..config import get_provider_config
from ..config.defaults import CODEX_CLI_PROVIDER_ID, CODEX_CLI_SDK_MODULE
from .errors import create_sdk_not_installed_error

_logger = get_logger("codex_cli.loader")


class LoaderStatus(str, Enum):
    UNATTEMPTED = "unattempted"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class BackendHandle:
    """Resolved backend entry points.

    Attributes:
        query: Callable ``query(prompt=..., options=...)`` returning an async
            iterator of backend records.
        abort_error: Exception type the SDK raises for aborted queries, or
            ``None`` when the SDK does not export one.
        module_name: Name the SDK was imported under.
    """

    query: Callable[..., Any]
    abort_error: Optional[Type[BaseException]] = None
    module_name: str = CODEX_CLI_SDK_MODULE


@dataclass(frozen=True)
class LoaderState:
    status: LoaderStatus = LoaderStatus.UNATTEMPTED
    handle: Optional[BackendHandle] = None
    reason: Optional[str] = None


def _handle_from_module(module: ModuleType, module_name: str) -> BackendHandle:
    query = getattr(module, "query", None)
    if not callable(query):
        raise ImportError(f"module '{module_name}' does not export a callable 'query'")
    abort_error = getattr(module, "AbortError", None)
    if not (isinstance(abort_error, type) and issubclass(abort_error, BaseException)):
        abort_error = None
    return BackendHandle(query=query, abort_error=abort_error, module_name=module_name)


def _configured_module_name() -> str:
    """SDK module from the merged config (file, then ``CODEX_CLI_SDK_MODULE`` env)."""
    name = get_provider_config(CODEX_CLI_PROVIDER_ID).get("sdk_module")
    return name if isinstance(name, str) and name.strip() else CODEX_CLI_SDK_MODULE


class BackendLoader:
    """Single memoized attempt at importing the backend SDK."""

    def __init__(
        self,
        module_name: Optional[str] = None,
        *,
        importer: Callable[[str], ModuleType] = import_module,
    ) -> None:
        self._module_name = module_name or _configured_module_name()
        self._importer = importer
        self._state = LoaderState()
        self._lock = threading.Lock()

    @property
    def module_name(self) -> str:
        return self._module_name

    @property
    def state(self) -> LoaderState:
        return self._state

    def load(self) -> LoaderState:
        """Attempt the import once; return the (now terminal) state."""
        state = self._state
        if state.status is not LoaderStatus.UNATTEMPTED:
            return state
        with self._lock:
            if self._state.status is not LoaderStatus.UNATTEMPTED:
                return self._state
            self._state = self._attempt()
            return self._state

    def _attempt(self) -> LoaderState:
        ctx = LogContext(provider=CODEX_CLI_PROVIDER_ID, operation="load")
        try:
            module = self._importer(self._module_name)
            handle = _handle_from_module(module, self._module_name)
        except Exception as exc:  # any import-time failure is permanent
            reason = f"{type(exc).__name__}: {exc}"
            normalized_log_event(
                _logger,
                "backend.load",
                ctx,
                phase="load",
                attempt=1,
                error_code="sdk_not_installed",
                emitted=False,
                tokens=None,
                outcome="failed",
                module=self._module_name,
                reason=reason,
            )
            return LoaderState(status=LoaderStatus.FAILED, reason=reason)
        normalized_log_event(
            _logger,
            "backend.load",
            ctx,
            phase="load",
            attempt=1,
            emitted=False,
            tokens=None,
            outcome="loaded",
            module=self._module_name,
        )
        return LoaderState(status=LoaderStatus.LOADED, handle=handle)

    def resolve(self, *, model_id: Optional[str] = None, operation: Optional[str] = None) -> BackendHandle:
        """Return the backend handle or raise the not-installed error.

        Raises:
            ClassifiedError: kind ``SDK_NOT_INSTALLED`` when the SDK could not
                be imported (now or on any earlier attempt).
        """
        state = self.load()
        if state.handle is None:
            raise create_sdk_not_installed_error(
                model_id=model_id,
                operation=operation,
                metadata={"module": self._module_name, "reason": state.reason},
            )
        return state.handle


_DEFAULT_LOADER: Optional[BackendLoader] = None
_DEFAULT_LOCK = threading.Lock()


def get_backend_loader() -> BackendLoader:
    """Return the process-wide loader, creating it on first access."""
    global _DEFAULT_LOADER
    loader = _DEFAULT_LOADER
    if loader is not None:
        return loader
    with _DEFAULT_LOCK:
        if _DEFAULT_LOADER is None:
            _DEFAULT_LOADER = BackendLoader()
        return _DEFAULT_LOADER


def reset_backend_loader(loader: Optional[BackendLoader] = None) -> None:
    """Replace the process-wide loader (``None`` re-creates it lazily).

    Intended for tests; production code never needs to reset the memoized
    outcome.
    """
    global _DEFAULT_LOADER
    with _DEFAULT_LOCK:
        _DEFAULT_LOADER = loader


__all__ = [
    "LoaderStatus",
    "LoaderState",
    "BackendHandle",
    "BackendLoader",
    "get_backend_loader",
    "reset_backend_loader",
]
