"""Typed backend event records.

The Codex CLI SDK yields loosely shaped records (plain dicts or SDK objects).
``parse_backend_event`` turns each record into one member of the
``BackendEvent`` union so the adapter handles every kind explicitly:

* ``AssistantTextDelta``: non-terminal text fragment
* ``ResultEvent``: terminal record carrying usage counters and a subtype
* ``ErrorSignal``: terminal failure reported in-band by the backend

Records the adapter does not consume (system/init, tool use) map to ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..base.models import coerce_count


class MalformedEventError(ValueError):
    """Raised when a backend record cannot be interpreted at all."""


@dataclass(frozen=True)
class AssistantTextDelta:
    text: str


@dataclass(frozen=True)
class ResultEvent:
    """Terminal result record.

    ``input_tokens``/``output_tokens`` are already coerced to non-negative
    ints (missing counters read as zero).
    """

    subtype: Optional[str] = None
    input_tokens: int = 0
    output_tokens: int = 0
    session_id: Optional[str] = None
    cost_usd: Optional[float] = None
    duration_ms: Optional[float] = None
    is_error: bool = False
    result_text: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class ErrorSignal:
    message: str
    code: Optional[str] = None
    exit_code: Optional[int] = None
    stderr: Optional[str] = None


BackendEvent = Union[AssistantTextDelta, ResultEvent, ErrorSignal]

_TEXT_DELTA_TYPES = frozenset({"text-delta", "assistant-text-delta", "text_delta"})


def _get(record: Any, key: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(key, default)
    return getattr(record, key, default)


def _as_dict(record: Any) -> Dict[str, Any]:
    if isinstance(record, Mapping):
        return dict(record)
    data = getattr(record, "__dict__", None)
    return dict(data) if isinstance(data, dict) else {"value": repr(record)}


def _assistant_text(record: Any) -> str:
    """Concatenate the text blocks of an ``assistant`` record in order."""
    message = _get(record, "message")
    content = _get(message, "content") if message is not None else _get(record, "content")
    if isinstance(content, str):
        return content
    parts: List[str] = []
    for block in content or ():
        if isinstance(block, str):
            parts.append(block)
        elif _get(block, "type") == "text":
            text = _get(block, "text")
            if isinstance(text, str):
                parts.append(text)
    return "".join(parts)


def _optional_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _parse_result(record: Any) -> ResultEvent:
    usage = _get(record, "usage") or {}
    session_id = _get(record, "session_id")
    result_text = _get(record, "result")
    return ResultEvent(
        subtype=_get(record, "subtype"),
        input_tokens=coerce_count(_get(usage, "input_tokens")),
        output_tokens=coerce_count(_get(usage, "output_tokens")),
        session_id=session_id if isinstance(session_id, str) else None,
        cost_usd=_optional_float(_get(record, "total_cost_usd", _get(record, "cost_usd"))),
        duration_ms=_optional_float(_get(record, "duration_ms")),
        is_error=bool(_get(record, "is_error", False)),
        result_text=result_text if isinstance(result_text, str) else None,
        raw=_as_dict(record),
    )


def _parse_error(record: Any) -> ErrorSignal:
    err = _get(record, "error")
    source = err if err is not None and not isinstance(err, str) else record
    message = _get(source, "message")
    if not isinstance(message, str) or not message:
        message = err if isinstance(err, str) and err else "Codex CLI reported an error"
    code = _get(source, "code")
    exit_code = _get(source, "exit_code", _get(record, "exit_code"))
    stderr = _get(source, "stderr", _get(record, "stderr"))
    return ErrorSignal(
        message=message,
        code=str(code) if code is not None else None,
        exit_code=exit_code if isinstance(exit_code, int) and not isinstance(exit_code, bool) else None,
        stderr=stderr if isinstance(stderr, str) else None,
    )


def parse_backend_event(record: Any) -> Optional[BackendEvent]:
    """Map one raw backend record onto the ``BackendEvent`` union.

    Returns ``None`` for record kinds the adapter ignores and for assistant
    records without any text. Raises ``MalformedEventError`` when the record
    has no readable ``type``.
    """
    if isinstance(record, (AssistantTextDelta, ResultEvent, ErrorSignal)):
        return record
    kind = _get(record, "type")
    if not isinstance(kind, str) or not kind:
        raise MalformedEventError(f"Backend event without a type: {record!r}")
    if kind == "assistant":
        text = _assistant_text(record)
        return AssistantTextDelta(text) if text else None
    if kind in _TEXT_DELTA_TYPES:
        text = _get(record, "text", _get(record, "delta"))
        return AssistantTextDelta(text) if isinstance(text, str) and text else None
    if kind == "result":
        return _parse_result(record)
    if kind in ("error", "error-signal"):
        return _parse_error(record)
    # system, tool and unknown record kinds carry nothing the adapter relays
    return None


__all__ = [
    "AssistantTextDelta",
    "ResultEvent",
    "ErrorSignal",
    "BackendEvent",
    "MalformedEventError",
    "parse_backend_event",
]
