"""Codex CLI adapter: language model, provider, factory and helpers."""

from .errors import (
    SDK_NOT_INSTALLED_MESSAGE,
    classify_backend_error,
    create_api_call_error,
    create_authentication_error,
    create_invalid_model_error,
    create_sdk_not_installed_error,
    create_timeout_error,
    get_error_metadata,
    is_authentication_error,
    is_timeout_error,
)
from .json_extractor import extract_json
from .language_model import MODEL_ALIASES, BackendQuery, CodexCliLanguageModel
from .loader import (
    BackendHandle,
    BackendLoader,
    LoaderState,
    LoaderStatus,
    get_backend_loader,
    reset_backend_loader,
)
from .message_converter import ConvertedPrompt, convert_to_codex_cli_messages
from .provider import CodexCliProvider
from .provider_factory import CodexCliClient, codex_cli, create_codex_cli
from .settings import CodexCliSettings

__all__ = [
    "SDK_NOT_INSTALLED_MESSAGE",
    "classify_backend_error",
    "create_api_call_error",
    "create_authentication_error",
    "create_invalid_model_error",
    "create_sdk_not_installed_error",
    "create_timeout_error",
    "get_error_metadata",
    "is_authentication_error",
    "is_timeout_error",
    "extract_json",
    "MODEL_ALIASES",
    "BackendQuery",
    "CodexCliLanguageModel",
    "BackendHandle",
    "BackendLoader",
    "LoaderState",
    "LoaderStatus",
    "get_backend_loader",
    "reset_backend_loader",
    "ConvertedPrompt",
    "convert_to_codex_cli_messages",
    "CodexCliProvider",
    "CodexCliClient",
    "codex_cli",
    "create_codex_cli",
    "CodexCliSettings",
]
