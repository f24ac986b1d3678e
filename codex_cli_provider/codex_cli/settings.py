"""Typed backend settings for the Codex CLI SDK.

Purpose
-------
The adapter stores settings as an immutable plain mapping; this module
validates that mapping right before it is handed to the backend so type
mistakes surface as a classified error instead of an SDK crash.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.

Notes
-----
- Unknown keys are kept (``extra="allow"``) and forwarded unchanged so newer
  SDK options work without a release of this package.
- ``None`` values are dropped from the options sent to the backend.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class CodexCliSettings(BaseModel):
    """Backend tuning options understood by the Codex CLI SDK.

    Attributes
    ----------
    max_turns:
        Upper bound on agent turns for one query.
    permission_mode / approval_mode:
        How the CLI asks for tool/edit approval.
    sandbox_mode:
        Filesystem sandbox policy of the CLI process.
    cwd:
        Working directory of the CLI process.
    cli_path:
        Explicit path to the ``codex`` executable.
    allowed_tools / disallowed_tools:
        Tool allow/deny lists.
    env:
        Extra environment variables for the CLI process.
    verbose:
        Ask the CLI for verbose output.
    """

    model_config = ConfigDict(extra="allow")

    max_turns: Optional[int] = Field(default=None, ge=1)
    permission_mode: Optional[str] = None
    approval_mode: Optional[str] = None
    sandbox_mode: Optional[str] = None
    cwd: Optional[str] = None
    cli_path: Optional[str] = None
    allowed_tools: Optional[List[str]] = None
    disallowed_tools: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None
    verbose: Optional[bool] = None


def to_backend_options(settings: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate ``settings`` and return the backend option dict.

    Raises ``pydantic.ValidationError`` for ill-typed known keys.
    """
    model = CodexCliSettings.model_validate(dict(settings))
    return model.model_dump(exclude_none=True)


__all__ = ["CodexCliSettings", "to_backend_options"]
