"""Configuration layer for the codex-cli provider.

Goals
-----
* Centralize defaults (default model, backend SDK module name).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       CODEX_CLI_PROVIDER_CONFIG_FILE
    3. Environment variables (CODEX_CLI_MODEL, CODEX_CLI_SDK_MODULE, ...)
    4. In-code overrides passed to the helper
* Provide per-command backend settings for the host application.
* Keep zero hard dependency on PyYAML (load YAML only if available).

External Config File (Optional)
-------------------------------
JSON is tried first; if that fails and PyYAML is installed, YAML is tried.
Structure example:

```
codex-cli:
  model: gpt-5-codex
  settings:
    max_turns: 5
    permission_mode: default
  command_specific:
    parse-prd:
      max_turns: 10
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_codex_cli_settings_for_command(command_name: str | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import (
    CODEX_CLI_CONFIG_FILE_ENV,
    CODEX_CLI_DEFAULT_MODEL,
    CODEX_CLI_PROVIDER_ID,
    CODEX_CLI_SDK_MODULE,
)

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    CODEX_CLI_PROVIDER_ID: {
        "model": CODEX_CLI_DEFAULT_MODEL,
        "sdk_module": CODEX_CLI_SDK_MODULE,
        "settings": {},
        "command_specific": {},
    },
}


# Environment variable suffix -> (config field, coercion). Prefix is derived
# from the provider key: "codex-cli" -> "CODEX_CLI_".
ENV_FIELD_MAP = {
    "MODEL": ("model", str),
    "SDK_MODULE": ("sdk_module", str),
    "MAX_TURNS": ("max_turns", int),
    "PERMISSION_MODE": ("permission_mode", str),
}

# Fields that belong to the backend ``settings`` block rather than the top level.
_SETTINGS_FIELDS = frozenset({"max_turns", "permission_mode"})


_FILE_CACHE: Optional[Dict[str, Any]] = None


def reset_config_cache() -> None:
    """Forget the cached external config file contents."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CODEX_CLI_CONFIG_FILE_ENV)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    try:
        text = p.read_text(encoding="utf-8")
    except OSError:
        _FILE_CACHE = {}
        return _FILE_CACHE
    data: Any = {}
    # Try JSON first
    try:
        data = json.loads(text)
    except ValueError:
        if yaml is not None:  # pragma: no cover (depends on optional lib)
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
        else:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def _env_prefix(provider: str) -> str:
    return provider.upper().replace("-", "_")


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = _env_prefix(provider)
    for suffix, (field, coerce) in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is None or not val.strip():
            continue
        try:
            out[field] = coerce(val.strip())
        except ValueError:
            continue
    return out


def _merge_section(cfg: Dict[str, Any], section: Dict[str, Any]) -> None:
    """Merge ``section`` into ``cfg``; nested ``settings`` blocks merge one level deep."""
    for key, value in section.items():
        if key in ("settings", "command_specific") and isinstance(value, dict):
            current = cfg.get(key)
            merged = dict(current) if isinstance(current, dict) else {}
            merged.update(value)
            cfg[key] = merged
        else:
            cfg[key] = value


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Environment values for backend tuning fields (``max_turns``,
    ``permission_mode``) land in the ``settings`` block.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    _merge_section(cfg, DEFAULTS.get(name, {}))

    # 2. External config file section
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        _merge_section(cfg, file_cfg)

    # 3. Env overrides
    env = _env_overrides(name)
    settings_env = {k: v for k, v in env.items() if k in _SETTINGS_FIELDS}
    top_env = {k: v for k, v in env.items() if k not in _SETTINGS_FIELDS}
    _merge_section(cfg, top_env)
    if settings_env:
        _merge_section(cfg, {"settings": settings_env})

    # 4. Explicit overrides
    if overrides:
        _merge_section(cfg, overrides)

    return cfg


def get_model(provider: str) -> Optional[str]:
    """Return the configured default model for ``provider`` (or None)."""
    return get_provider_config(provider).get("model")


def get_codex_cli_settings_for_command(command_name: Optional[str] = None) -> Dict[str, Any]:
    """Return backend settings for a host command.

    The ``settings`` block of the codex-cli section is overlaid with
    ``command_specific[command_name]`` when such an entry exists. The returned
    dict is a fresh copy the caller may mutate.
    """
    cfg = get_provider_config(CODEX_CLI_PROVIDER_ID)
    settings = dict(cfg.get("settings") or {})
    if command_name:
        per_command = (cfg.get("command_specific") or {}).get(command_name)
        if isinstance(per_command, dict):
            settings.update(per_command)
    return settings


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "get_model",
    "get_codex_cli_settings_for_command",
    "reset_config_cache",
]
