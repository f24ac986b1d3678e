"""Tests for best-effort JSON extraction from model output."""
from __future__ import annotations

import json
import time

import pytest

from codex_cli_provider.codex_cli.json_extractor import extract_json


def test_fenced_json_block():
    text = "Here you go:\n```json\n{\"tasks\": [1, 2]}\n```\nAnything else?"
    assert json.loads(extract_json(text)) == {"tasks": [1, 2]}  # nosec B101


def test_fence_without_language_tag():
    assert extract_json("```\n[1, 2, 3]\n```") == "[1, 2, 3]"  # nosec B101


def test_embedded_object_in_prose():
    text = 'The answer is {"ok": true, "note": "braces } inside"} as requested.'
    assert extract_json(text) == '{"ok": true, "note": "braces } inside"}'  # nosec B101


def test_skips_unparseable_brackets():
    text = "See [link] then {\"a\": 1}"
    assert extract_json(text) == '{"a": 1}'  # nosec B101


def test_whole_text_is_trimmed():
    assert extract_json('  \n{"a": 1}\n  ') == '{"a": 1}'  # nosec B101


@pytest.mark.parametrize("text", ["", "no json here", "{not: json}", "just [brackets"])
def test_passthrough_when_nothing_parses(text):
    assert extract_json(text) == text  # nosec B101


@pytest.mark.parametrize("prefix", ["", "Here: "])
def test_deep_nesting_passes_through(prefix):
    text = prefix + "[" * 50000 + "]" * 50000
    assert extract_json(text) == text  # nosec B101


def test_many_unmatched_brackets_stay_fast():
    text = "{a " * 20000
    start = time.perf_counter()
    assert extract_json(text) == text  # nosec B101
    assert time.perf_counter() - start < 2.0  # nosec B101


def test_scan_over_many_unparseable_brackets_is_bounded():
    text = "[x] " * 100000 + '{"a": 1}'
    start = time.perf_counter()
    extract_json(text)
    assert time.perf_counter() - start < 2.0  # nosec B101
