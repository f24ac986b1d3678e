"""LanguageModel Protocol (single-class module).

Defines the host-facing model contract implemented by adapters.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Protocol, runtime_checkable

from ..models import GenerateRequest, GenerateResult, UnsupportedWarning
from ..streaming import StreamController


@runtime_checkable
class LanguageModel(Protocol):
    """Uniform language-model contract consumed by the host application.

    Implementations raise ``ClassifiedError`` for every failure; they never
    return an error encoded in a normal result.
    """

    @property
    def provider(self) -> str:
        """Canonical provider identifier, e.g. ``"codex-cli"``."""
        ...

    @property
    def model_id(self) -> str:
        """Model id exactly as given at construction."""
        ...

    @property
    def settings(self) -> Mapping[str, Any]:
        """Immutable merged backend settings."""
        ...

    def get_model(self) -> str:
        """Backend-native model name."""
        ...

    def generate_unsupported_warnings(self, options: Mapping[str, Any]) -> List[UnsupportedWarning]:
        """Warnings for requested options the backend ignores."""
        ...

    async def do_generate(self, request: GenerateRequest) -> GenerateResult:
        """Run one generation to completion."""
        ...

    async def do_stream(self, request: GenerateRequest) -> StreamController:
        """Start one generation and relay chunks as they arrive."""
        ...
