"""
Provider-agnostic interfaces (Protocols).

Re-exports the single-class modules under
``codex_cli_provider.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import LanguageModel, ModelProvider

__all__ = [
    "LanguageModel",
    "ModelProvider",
]
