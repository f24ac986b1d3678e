"""Best-effort JSON extraction from free-form model output.

CLI models often wrap structured replies in Markdown fences or surround them
with prose. ``extract_json`` returns just the JSON value when one can be
found and parsed; otherwise the text comes back unchanged.

The scan is bounded: it runs inside ``do_generate`` on the event loop, so at
most ``_MAX_SCAN_CHARS`` of input and ``_MAX_CANDIDATES`` bracket positions are
tried, and parser failures of any kind (including ``RecursionError`` on deeply
nested input) count as "no JSON here".
"""
from __future__ import annotations

import json
import re
from typing import Optional

_FENCE_RE = re.compile(r"```[a-zA-Z0-9_-]*\s*\n?(.*?)```", re.DOTALL)

_OPENERS = "{["

_MAX_SCAN_CHARS = 200_000
_MAX_CANDIDATES = 64

_DECODER = json.JSONDecoder()

# Parser failures that mean "not JSON"; RecursionError comes from nesting depth.
_PARSE_ERRORS = (ValueError, RecursionError)


def _decode_at(text: str, idx: int) -> Optional[int]:
    """Index one past the JSON value starting at ``text[idx]``, or None."""
    try:
        _, end = _DECODER.raw_decode(text, idx)
    except _PARSE_ERRORS:
        return None
    return end


def _first_json(text: str) -> Optional[str]:
    stripped = text.strip()
    if stripped and stripped[0] in _OPENERS and len(stripped) <= _MAX_SCAN_CHARS:
        try:
            json.loads(stripped)
        except _PARSE_ERRORS:
            pass
        else:
            return stripped
    window = text[:_MAX_SCAN_CHARS]
    tried = 0
    idx = 0
    while tried < _MAX_CANDIDATES:
        brace = window.find("{", idx)
        bracket = window.find("[", idx)
        starts = [i for i in (brace, bracket) if i != -1]
        if not starts:
            return None
        start = min(starts)
        tried += 1
        end = _decode_at(window, start)
        if end is not None:
            return window[start:end]
        idx = start + 1
    return None


def extract_json(text: str) -> str:
    """Return the first JSON object/array embedded in ``text``, trimmed.

    Fenced code blocks are searched first, then the whole text. When nothing
    parses, ``text`` is returned as-is.
    """
    if not text:
        return text
    for match in _FENCE_RE.finditer(text):
        found = _first_json(match.group(1))
        if found is not None:
            return found
    found = _first_json(text)
    return found if found is not None else text


__all__ = ["extract_json"]
