"""Codex CLI provider for host model registries.

Implements the ``ModelProvider`` capability interface by composition: the
provider only knows its name, skips credential validation (the CLI handles
its own login), and hands out clients configured with the per-command
settings from ``codex_cli_provider.config``.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..base.errors import ClassifiedError
from ..base.logging import LogContext, get_logger, log_event
from ..config import get_codex_cli_settings_for_command, get_model
from ..config.defaults import (
    CODEX_CLI_API_KEY_ENV,
    CODEX_CLI_PROVIDER_ID,
    CODEX_CLI_PROVIDER_NAME,
)
from .errors import create_api_call_error
from .loader import BackendLoader
from .provider_factory import CodexCliClient, create_codex_cli

_logger = get_logger("codex_cli.provider")


class CodexCliProvider:
    """``ModelProvider`` implementation for the Codex CLI."""

    def __init__(self, *, loader: Optional[BackendLoader] = None) -> None:
        self._loader = loader

    @property
    def name(self) -> str:
        return CODEX_CLI_PROVIDER_NAME

    def get_required_api_key_name(self) -> str:
        return CODEX_CLI_API_KEY_ENV

    def is_required_api_key(self) -> bool:
        return False

    def default_model(self) -> Optional[str]:
        """Return the configured default model id (``model`` in the codex-cli config)."""
        return get_model(CODEX_CLI_PROVIDER_ID)

    def validate_auth(self, params: Optional[Mapping[str, Any]] = None) -> None:
        """No-op: the Codex CLI authenticates itself, no API key is needed."""
        return None

    def get_client(self, params: Optional[Mapping[str, Any]] = None) -> CodexCliClient:
        """Return a client using the settings configured for ``params["command_name"]``.

        ``base_url`` and ``api_key`` in ``params`` are ignored.
        """
        command_name = (params or {}).get("command_name")
        try:
            settings = get_codex_cli_settings_for_command(command_name)
            client = create_codex_cli(settings, loader=self._loader)
        except ClassifiedError:
            raise
        except Exception as exc:
            raise create_api_call_error(
                f"{self.name} API error during client initialization: {exc}",
                cause=exc,
                operation="get_client",
            ) from exc
        log_event(
            _logger,
            "provider.client",
            LogContext(provider=CODEX_CLI_PROVIDER_ID, operation="get_client"),
            command=command_name,
            settings=sorted(settings),
        )
        return client


__all__ = ["CodexCliProvider"]
