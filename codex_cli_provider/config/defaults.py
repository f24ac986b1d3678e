"""codex_cli_provider.config.defaults
==================================

Central place for small, stable default values used across the package. These
can be overridden through environment variables or an external config file
(see ``codex_cli_provider.config``).

Only plain constants live here so that any module may import them without
creating import cycles.
"""

from __future__ import annotations

# ---- Provider identity ----
# Canonical provider key reported by every model instance.
CODEX_CLI_PROVIDER_ID = "codex-cli"
# Display name of the provider in the host registry.
CODEX_CLI_PROVIDER_NAME = "Codex CLI"
# Environment variable name a host may look up; the provider does not require it.
CODEX_CLI_API_KEY_ENV = "CODEX_CLI_API_KEY"  # pragma: allowlist secret - env var name

# ---- Backend ----
# Import name of the optional backend SDK module.
CODEX_CLI_SDK_MODULE = "codex_cli_sdk"
# Package name callers are told to install when the SDK is missing.
CODEX_CLI_SDK_PACKAGE = "@openai/codex-cli"
# Default model when a host asks the config layer for one.
CODEX_CLI_DEFAULT_MODEL = "gpt-5-codex"

# ---- Config file ----
# Environment variable pointing at an optional JSON/YAML config file.
CODEX_CLI_CONFIG_FILE_ENV = "CODEX_CLI_PROVIDER_CONFIG_FILE"

__all__ = [
    "CODEX_CLI_PROVIDER_ID",
    "CODEX_CLI_PROVIDER_NAME",
    "CODEX_CLI_API_KEY_ENV",
    "CODEX_CLI_SDK_MODULE",
    "CODEX_CLI_SDK_PACKAGE",
    "CODEX_CLI_DEFAULT_MODEL",
    "CODEX_CLI_CONFIG_FILE_ENV",
]
