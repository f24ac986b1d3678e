"""Codex CLI provider factory.

``create_codex_cli`` returns a callable client that builds
``CodexCliLanguageModel`` instances. Provider-level default settings are
merged under the per-model settings (per-model wins, shallow merge).
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..base.errors import ClassifiedError, ErrorKind
from ..config.defaults import CODEX_CLI_PROVIDER_ID
from .language_model import CodexCliLanguageModel
from .loader import BackendLoader


class CodexCliClient:
    """Callable model factory: ``client("opus", {"max_turns": 3})``."""

    def __init__(
        self,
        default_settings: Optional[Mapping[str, Any]] = None,
        *,
        loader: Optional[BackendLoader] = None,
    ) -> None:
        self._default_settings = dict(default_settings or {})
        self._loader = loader

    @property
    def default_settings(self) -> Mapping[str, Any]:
        return dict(self._default_settings)

    def __call__(self, model_id: str, settings: Optional[Mapping[str, Any]] = None) -> CodexCliLanguageModel:
        return self.language_model(model_id, settings)

    def language_model(
        self, model_id: str, settings: Optional[Mapping[str, Any]] = None
    ) -> CodexCliLanguageModel:
        return CodexCliLanguageModel(
            model_id,
            settings,
            default_settings=self._default_settings,
            loader=self._loader,
        )

    # Alias kept for hosts that ask for chat models by name.
    chat = language_model

    def text_embedding_model(self, model_id: str) -> Any:
        """Codex CLI serves no embedding models; always raises ``INVALID_MODEL``."""
        raise ClassifiedError(
            kind=ErrorKind.INVALID_MODEL,
            message=f"No such textEmbeddingModel: {model_id}",
            provider=CODEX_CLI_PROVIDER_ID,
            model_id=model_id if isinstance(model_id, str) else None,
            operation="text_embedding_model",
            metadata={"model_type": "textEmbeddingModel"},
        )


def create_codex_cli(
    default_settings: Optional[Mapping[str, Any]] = None,
    *,
    loader: Optional[BackendLoader] = None,
) -> CodexCliClient:
    """Create a Codex CLI client with provider-level ``default_settings``."""
    return CodexCliClient(default_settings, loader=loader)


# Default client with no provider-level settings.
codex_cli = create_codex_cli()


__all__ = ["CodexCliClient", "create_codex_cli", "codex_cli"]
