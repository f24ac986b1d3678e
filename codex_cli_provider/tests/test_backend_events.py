"""Tests for mapping raw backend records onto typed events."""
from __future__ import annotations

import pytest

from codex_cli_provider.codex_cli.backend_events import (
    AssistantTextDelta,
    ErrorSignal,
    MalformedEventError,
    ResultEvent,
    parse_backend_event,
)


def test_assistant_text_blocks_are_concatenated():
    record = {
        "type": "assistant",
        "message": {
            "content": [
                {"type": "text", "text": "Hel"},
                {"type": "tool_use", "name": "shell"},
                {"type": "text", "text": "lo"},
            ]
        },
    }
    assert parse_backend_event(record) == AssistantTextDelta("Hello")  # nosec B101


def test_assistant_record_without_text_is_skipped():
    assert parse_backend_event({"type": "assistant", "message": {"content": []}}) is None  # nosec B101


def test_result_usage_is_coerced():
    event = parse_backend_event(
        {"type": "result", "subtype": "success", "usage": {"input_tokens": "7", "output_tokens": None}}
    )
    assert isinstance(event, ResultEvent)  # nosec B101
    assert event.input_tokens == 7  # nosec B101
    assert event.output_tokens == 0  # nosec B101
    assert event.subtype == "success"  # nosec B101


def test_error_record_shapes():
    nested = parse_backend_event({"type": "error", "error": {"message": "bad", "code": 42}})
    flat = parse_backend_event({"type": "error", "message": "worse", "exit_code": 3})
    bare = parse_backend_event({"type": "error"})
    assert nested == ErrorSignal(message="bad", code="42")  # nosec B101
    assert flat == ErrorSignal(message="worse", exit_code=3)  # nosec B101
    assert isinstance(bare, ErrorSignal) and bare.message  # nosec B101


@pytest.mark.parametrize("record", [{"type": "system", "subtype": "init"}, {"type": "tool_result"}, {"type": "new"}])
def test_unconsumed_records_map_to_none(record):
    assert parse_backend_event(record) is None  # nosec B101


@pytest.mark.parametrize("record", [{}, {"type": ""}, "text", None])
def test_record_without_type_is_malformed(record):
    with pytest.raises(MalformedEventError):
        parse_backend_event(record)
