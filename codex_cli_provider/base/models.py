"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``codex_cli_provider.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, Role
from .models_parts.token_usage import TokenUsage, coerce_count
from .models_parts.unsupported_warning import UnsupportedWarning
from .models_parts.generate_request import GenerateMode, GenerateRequest, SAMPLING_FIELDS
from .models_parts.generate_result import GenerateResult

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "TokenUsage",
    "coerce_count",
    "UnsupportedWarning",
    "GenerateMode",
    "GenerateRequest",
    "SAMPLING_FIELDS",
    "GenerateResult",
]
