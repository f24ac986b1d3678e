"""Tests for the configuration layer (defaults, file, env, overrides)."""
from __future__ import annotations

import json

from codex_cli_provider.config import (
    get_codex_cli_settings_for_command,
    get_model,
    get_provider_config,
    reset_config_cache,
)
from codex_cli_provider.config.defaults import CODEX_CLI_DEFAULT_MODEL, CODEX_CLI_SDK_MODULE


def _write_config(tmp_path, monkeypatch, data):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    monkeypatch.setenv("CODEX_CLI_PROVIDER_CONFIG_FILE", str(path))
    reset_config_cache()
    return path


def test_defaults_without_file_or_env(monkeypatch):
    monkeypatch.delenv("CODEX_CLI_PROVIDER_CONFIG_FILE", raising=False)
    monkeypatch.delenv("CODEX_CLI_MODEL", raising=False)
    monkeypatch.delenv("CODEX_CLI_MAX_TURNS", raising=False)
    monkeypatch.delenv("CODEX_CLI_SDK_MODULE", raising=False)
    monkeypatch.delenv("CODEX_CLI_PERMISSION_MODE", raising=False)
    cfg = get_provider_config("codex-cli")
    assert cfg["model"] == CODEX_CLI_DEFAULT_MODEL  # nosec B101
    assert cfg["sdk_module"] == CODEX_CLI_SDK_MODULE  # nosec B101
    assert get_codex_cli_settings_for_command("parse-prd") == {}  # nosec B101


def test_unknown_provider_is_empty():
    assert get_provider_config("nope") == {}  # nosec B101


def test_file_then_env_then_overrides(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        {"codex-cli": {"model": "gpt-5", "settings": {"max_turns": 3, "verbose": True}}},
    )
    assert get_model("codex-cli") == "gpt-5"  # nosec B101

    monkeypatch.delenv("CODEX_CLI_PERMISSION_MODE", raising=False)
    monkeypatch.setenv("CODEX_CLI_MODEL", "mini")
    monkeypatch.setenv("CODEX_CLI_MAX_TURNS", "8")
    cfg = get_provider_config("codex-cli", overrides={"settings": {"verbose": False}})
    assert cfg["model"] == "mini"  # nosec B101
    assert cfg["settings"] == {"max_turns": 8, "verbose": False}  # nosec B101


def test_invalid_env_number_is_ignored(monkeypatch):
    monkeypatch.delenv("CODEX_CLI_PROVIDER_CONFIG_FILE", raising=False)
    monkeypatch.setenv("CODEX_CLI_MAX_TURNS", "lots")
    assert "max_turns" not in get_provider_config("codex-cli")["settings"]  # nosec B101


def test_command_specific_settings_overlay(tmp_path, monkeypatch):
    monkeypatch.delenv("CODEX_CLI_MAX_TURNS", raising=False)
    monkeypatch.delenv("CODEX_CLI_PERMISSION_MODE", raising=False)
    _write_config(
        tmp_path,
        monkeypatch,
        {
            "codex-cli": {
                "settings": {"max_turns": 2, "permission_mode": "default"},
                "command_specific": {"expand": {"max_turns": 9}},
            }
        },
    )
    assert get_codex_cli_settings_for_command("expand") == {  # nosec B101
        "max_turns": 9,
        "permission_mode": "default",
    }
    assert get_codex_cli_settings_for_command("other") == {  # nosec B101
        "max_turns": 2,
        "permission_mode": "default",
    }
    assert get_codex_cli_settings_for_command() == get_codex_cli_settings_for_command("other")  # nosec B101


def test_unreadable_file_degrades_to_defaults(tmp_path, monkeypatch):
    path = tmp_path / "broken.json"
    path.write_text("{ this is not json", encoding="utf-8")
    monkeypatch.setenv("CODEX_CLI_PROVIDER_CONFIG_FILE", str(path))
    monkeypatch.delenv("CODEX_CLI_MODEL", raising=False)
    reset_config_cache()
    assert get_provider_config("codex-cli")["model"] == CODEX_CLI_DEFAULT_MODEL  # nosec B101


def test_missing_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("CODEX_CLI_PROVIDER_CONFIG_FILE", str(tmp_path / "absent.json"))
    monkeypatch.delenv("CODEX_CLI_MODEL", raising=False)
    reset_config_cache()
    assert get_model("codex-cli") == CODEX_CLI_DEFAULT_MODEL  # nosec B101
