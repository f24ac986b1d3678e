"""Interface Protocols, one per module."""

from .language_model import LanguageModel
from .model_provider import ModelProvider

__all__ = ["LanguageModel", "ModelProvider"]
