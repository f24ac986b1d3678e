"""Tests for the host prompt -> Codex CLI prompt conversion."""
from __future__ import annotations

import copy

from codex_cli_provider.base.models import ContentPart, Message
from codex_cli_provider.codex_cli.message_converter import (
    JSON_MODE_INSTRUCTION,
    convert_to_codex_cli_messages,
)


def test_system_prompt_is_extracted():
    prompt = [
        Message(role="system", content="You are a planner."),
        Message(role="user", content="Plan a trip."),
    ]
    converted = convert_to_codex_cli_messages(prompt)
    assert converted.system_prompt == "You are a planner."  # nosec B101
    assert "Plan a trip." in converted.messages_prompt  # nosec B101
    assert "You are a planner." not in converted.messages_prompt  # nosec B101


def test_empty_prompt_yields_empty_strings():
    converted = convert_to_codex_cli_messages([])
    assert converted.messages_prompt == ""  # nosec B101
    assert converted.system_prompt == ""  # nosec B101
    assert convert_to_codex_cli_messages(None).messages_prompt == ""  # nosec B101


def test_roles_are_labelled_in_order():
    prompt = [
        Message(role="user", content="Q1"),
        Message(role="assistant", content="A1"),
        Message(role="user", content="Q2"),
    ]
    converted = convert_to_codex_cli_messages(prompt)
    assert converted.messages_prompt == "Human: Q1\n\nAssistant: A1\n\nHuman: Q2"  # nosec B101


def test_multiple_system_messages_join_in_order():
    prompt = [
        Message(role="system", content="One."),
        Message(role="user", content="hi"),
        Message(role="system", content=[ContentPart(type="text", text="Two.")]),
    ]
    assert convert_to_codex_cli_messages(prompt).system_prompt == "One.\n\nTwo."  # nosec B101


def test_non_text_parts_become_markers():
    prompt = [
        Message(
            role="assistant",
            content=[
                ContentPart(type="text", text="Calling a tool"),
                ContentPart(type="tool_call", data={"tool_name": "search", "args": {"q": "x"}}),
            ],
        ),
        Message(
            role="tool",
            content=[ContentPart(type="tool_result", data={"tool_name": "search", "result": {"hits": 2}})],
        ),
        Message(
            role="user",
            content=[
                ContentPart(type="image", data={"media_type": "image/jpeg"}),
                ContentPart(type="file", data={"name": "notes.md"}),
                ContentPart(type="refusal"),
            ],
        ),
    ]
    text = convert_to_codex_cli_messages(prompt).messages_prompt
    assert '[Tool Call: search] {"q":"x"}' in text  # nosec B101
    assert 'Tool Result: [Tool Result: search] {"hits":2}' in text  # nosec B101
    assert "[Image: image/jpeg]" in text  # nosec B101
    assert "[File: notes.md]" in text  # nosec B101
    assert "[refusal]" in text  # nosec B101


def test_json_mode_appends_instruction():
    converted = convert_to_codex_cli_messages([Message(role="user", content="Give data")], json_mode=True)
    assert converted.messages_prompt.endswith(JSON_MODE_INSTRUCTION)  # nosec B101


def test_prompt_is_not_mutated():
    prompt = [
        Message(role="system", content="S"),
        Message(role="user", content=[ContentPart(type="text", text="U")]),
    ]
    snapshot = copy.deepcopy(prompt)
    convert_to_codex_cli_messages(prompt, json_mode=True)
    assert prompt == snapshot  # nosec B101


def test_raw_parts_are_rendered_not_dropped():
    prompt = [
        Message(
            role="user",
            content=[ContentPart(type="text", text="Look"), {"type": "audio"}, {"data": 1}, "plain"],
        )
    ]
    converted = convert_to_codex_cli_messages(prompt)
    assert converted.messages_prompt == "Human: Look\n[audio]\n[unknown]\nplain"  # nosec B101
