from __future__ import annotations

import asyncio
import types

import pytest

from codex_cli_provider.base.cancellation import CancelledError
from codex_cli_provider.base.errors import ClassifiedError, ErrorKind, classify_exception
from codex_cli_provider.codex_cli.errors import (
    SDK_NOT_INSTALLED_MESSAGE,
    classify_backend_error,
    create_authentication_error,
    create_invalid_model_error,
    create_sdk_not_installed_error,
    create_timeout_error,
    get_error_metadata,
    is_authentication_error,
    is_timeout_error,
)


class _AbortError(Exception):
    pass


class _CliError(Exception):
    def __init__(self, message, **attrs):
        super().__init__(message)
        for k, v in attrs.items():
            setattr(self, k, v)


def test_sdk_not_installed_message_is_fixed():
    assert SDK_NOT_INSTALLED_MESSAGE == (  # nosec B101
        "Codex CLI SDK is not installed. "
        "Please install '@openai/codex-cli' to use the codex-cli provider."
    )
    err = create_sdk_not_installed_error(model_id="opus", operation="do_generate")
    assert str(err) == SDK_NOT_INSTALLED_MESSAGE  # nosec B101
    assert err.kind is ErrorKind.SDK_NOT_INSTALLED  # nosec B101


def test_classified_error_passthrough():
    original = create_authentication_error("nope", model_id="opus")
    assert classify_backend_error(original, model_id="other") is original  # nosec B101
    assert classify_exception(original) is ErrorKind.AUTHENTICATION  # nosec B101


@pytest.mark.parametrize(
    "exc, abort_error, kind",
    [
        (_AbortError("aborted"), _AbortError, ErrorKind.TIMEOUT),
        (CancelledError("stop"), None, ErrorKind.TIMEOUT),
        (asyncio.CancelledError(), None, ErrorKind.TIMEOUT),
        (TimeoutError("slow"), None, ErrorKind.TIMEOUT),
        (_CliError("spawn failed", code="ETIMEDOUT"), None, ErrorKind.TIMEOUT),
        (Exception("Request timed out after 60s"), None, ErrorKind.TIMEOUT),
        (_CliError("exit", exit_code=401), None, ErrorKind.AUTHENTICATION),
        (_CliError("exit", status=403), None, ErrorKind.AUTHENTICATION),
        (Exception("Not authenticated. Please login first"), None, ErrorKind.AUTHENTICATION),
        (Exception("Invalid API key provided"), None, ErrorKind.AUTHENTICATION),
        (Exception("unexpected EOF from cli"), None, ErrorKind.API_CALL),
        (_AbortError("aborted"), None, ErrorKind.API_CALL),
    ],
)
def test_classification_table(exc, abort_error, kind):
    err = classify_backend_error(exc, model_id="opus", operation="do_generate", abort_error=abort_error)
    assert err.kind is kind  # nosec B101
    assert err.cause is exc  # nosec B101
    assert err.model_id == "opus"  # nosec B101
    assert err.operation == "do_generate"  # nosec B101


def test_status_on_response_object():
    e = types.SimpleNamespace(response=types.SimpleNamespace(status_code=401))
    assert classify_exception(e) is ErrorKind.AUTHENTICATION  # nosec B101


def test_cancellation_uses_fixed_message():
    err = classify_backend_error(_AbortError("AbortError: signal"), abort_error=_AbortError)
    assert str(err) == "Codex CLI request was cancelled"  # nosec B101
    assert is_timeout_error(err)  # nosec B101


def test_other_kinds_keep_backend_message():
    err = classify_backend_error(Exception("codex exited with code 2"))
    assert str(err) == "codex exited with code 2"  # nosec B101
    assert err.retryable is False  # nosec B101


def test_metadata_collects_diagnostics():
    exc = _CliError("boom", code="E_SPAWN", exit_code=2, stderr=b"fatal: no tty")
    err = classify_backend_error(exc, prompt="x" * 500)
    meta = get_error_metadata(err)
    assert meta["code"] == "E_SPAWN"  # nosec B101
    assert meta["exit_code"] == 2  # nosec B101
    assert meta["stderr"] == "fatal: no tty"  # nosec B101
    assert len(meta["prompt_excerpt"]) == 200  # nosec B101


def test_get_error_metadata_on_raw_exception():
    meta = get_error_metadata(_CliError("x", exit_code=1))
    assert meta == {"error_type": "_CliError", "exit_code": 1}  # nosec B101


def test_predicates():
    assert is_authentication_error(create_authentication_error("no"))  # nosec B101
    assert not is_authentication_error(Exception("authentication"))  # nosec B101
    assert is_timeout_error(create_timeout_error("slow"))  # nosec B101


def test_invalid_model_error_renders_id():
    assert str(create_invalid_model_error("")) == 'No such model: ""'  # nosec B101
    assert str(create_invalid_model_error(None)) == "No such model: null"  # nosec B101
    assert create_invalid_model_error(None).kind is ErrorKind.INVALID_MODEL  # nosec B101


def test_classified_error_is_exception_with_dict_view():
    err = ClassifiedError(kind=ErrorKind.API_CALL, message="m", cause=ValueError("v"))
    assert isinstance(err, Exception)  # nosec B101
    data = err.to_dict()
    assert data["kind"] == "api_call"  # nosec B101
    assert data["provider"] == "codex-cli"  # nosec B101
    assert "ValueError" in data["cause"]  # nosec B101
