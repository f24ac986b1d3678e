"""
Unsupported-setting warning DTO.

Returned alongside results when a caller requested an option the backend
cannot apply; the option is ignored rather than failing the call.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Literal


@dataclass(frozen=True)
class UnsupportedWarning:
    """One ignored call option.

    Attributes:
        setting: Name of the ignored option (e.g. ``"temperature"``).
        details: Human-readable explanation naming the option.
        type: Always ``"unsupported-setting"``.
    """

    setting: str
    details: str
    type: Literal["unsupported-setting"] = "unsupported-setting"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


__all__ = ["UnsupportedWarning"]
