"""Pytest configuration for the codex-cli provider test suite.

Provides a scripted stand-in for the Codex CLI SDK, loaders wired to it
through the injectable importer, and a log collector attached to the shared
package logger. No test imports a real SDK.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

import pytest

from codex_cli_provider.base.logging import BASE_LOGGER_NAME, get_logger
from codex_cli_provider.codex_cli.loader import BackendLoader, reset_backend_loader
from codex_cli_provider.config import reset_config_cache


class FakeAbortError(Exception):
    """Abort type exported by the fake SDK."""


class FakeSdk:
    """Scripted backend module.

    ``query`` replays ``records`` in order, then raises ``error`` if one was
    given. It raises ``FakeAbortError`` as soon as the abort signal passed in
    the options is tripped, like the real SDK does.
    """

    AbortError = FakeAbortError

    def __init__(self, records: Iterable[Any] = (), *, error: Optional[BaseException] = None) -> None:
        self.records = list(records)
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.yielded = 0
        self.closed = False

    async def query(self, *, prompt: str, options: Dict[str, Any]):
        self.calls.append({"prompt": prompt, "options": options})
        signal = options.get("abort_signal")
        try:
            for record in self.records:
                if signal is not None and signal.cancelled:
                    raise FakeAbortError("The operation was aborted")
                self.yielded += 1
                yield record
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


def text_record(text: str) -> Dict[str, Any]:
    return {"type": "assistant", "message": {"content": [{"type": "text", "text": text}]}}


def result_record(input_tokens: Any = 5, output_tokens: Any = 10, **extra: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "type": "result",
        "subtype": "success",
        "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
    }
    record.update(extra)
    return record


class CountingImporter:
    """Importer double that counts calls and returns ``module`` or raises."""

    def __init__(self, module: Any = None, error: Optional[BaseException] = None) -> None:
        self.module = module
        self.error = error
        self.calls = 0

    def __call__(self, name: str) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.module


@pytest.fixture(autouse=True)
def _isolate_process_state() -> Iterator[None]:
    """Reset the process-wide loader and cached config around each test."""
    reset_backend_loader()
    reset_config_cache()
    yield
    reset_backend_loader()
    reset_config_cache()


@pytest.fixture()
def make_loader():
    """Return a factory building a loader around a fake SDK (or import error)."""

    def _make(sdk: Any = None, *, error: Optional[BaseException] = None) -> BackendLoader:
        importer = CountingImporter(sdk, error)
        loader = BackendLoader("fake_codex_sdk", importer=importer)
        loader.importer_double = importer  # type: ignore[attr-defined]
        return loader

    return _make


@pytest.fixture()
def missing_sdk_loader(make_loader) -> BackendLoader:
    """Loader whose import always fails as if the SDK were not installed."""
    loader = make_loader(error=ModuleNotFoundError("No module named 'fake_codex_sdk'"))
    reset_backend_loader(loader)
    return loader


class _ListHandler(logging.Handler):
    """Capture JSON log payloads into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.payloads: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.payloads.append(json.loads(record.getMessage()))
        except ValueError:
            self.payloads.append({"message": record.getMessage()})

    def events(self) -> List[str]:
        return [p.get("event") for p in self.payloads]


@pytest.fixture()
def log_records() -> Iterator[_ListHandler]:
    """Attach a collecting handler to the shared package logger."""
    logger = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
