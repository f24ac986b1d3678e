"""Models parts package public surface.

Re-exports individual DTOs; `codex_cli_provider.base.models` remains the
primary stable import path.
"""

from .content_part import ContentPart, ContentPartType
from .message import Message, Role
from .token_usage import TokenUsage, coerce_count
from .unsupported_warning import UnsupportedWarning
from .generate_request import GenerateMode, GenerateRequest, SAMPLING_FIELDS
from .generate_result import GenerateResult

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
