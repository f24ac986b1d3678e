"""
GenerateRequest DTO for single-shot and streaming calls.

Carries the host prompt, the output mode, the generic sampling knobs a host
may set, per-call backend setting overrides, and an optional cancellation
token supplied by the caller.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

from .message import Message

if TYPE_CHECKING:
    from ..cancellation import CancellationToken


GenerateMode = Literal["regular", "object-json"]

# Sampling knobs in the order they are reported when ignored.
SAMPLING_FIELDS = (
    "temperature",
    "max_tokens",
    "top_p",
    "top_k",
    "seed",
    "presence_penalty",
    "frequency_penalty",
    "stop_sequences",
)


@dataclass
class GenerateRequest:
    """Host request for one generation.

    Attributes:
        prompt: Ordered host messages (never mutated by the adapter).
        mode: ``"object-json"`` asks for a structured JSON reply.
        response_format: ``"json_object"`` is an alternate JSON-mode switch.
        temperature, max_tokens, top_p, top_k, seed, presence_penalty,
        frequency_penalty, stop_sequences: Generic sampling knobs.
        settings: Backend setting overrides for this call only.
        cancellation_token: Caller-owned abort signal.
    """

    prompt: List[Message]
    mode: GenerateMode = "regular"
    response_format: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    seed: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    stop_sequences: Optional[List[str]] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    cancellation_token: Optional["CancellationToken"] = None

    @property
    def json_mode(self) -> bool:
        """Whether the caller asked for structured JSON output."""
        return self.mode == "object-json" or self.response_format == "json_object"

    def options(self) -> Dict[str, Any]:
        """Return the sampling knobs that were set, in ``SAMPLING_FIELDS`` order."""
        return {
            name: getattr(self, name)
            for name in SAMPLING_FIELDS
            if getattr(self, name) is not None
        }


__all__ = ["GenerateRequest", "GenerateMode", "SAMPLING_FIELDS"]
