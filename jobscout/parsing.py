"""Turn provider text into untyped JSON, then coerce it field by field.

Providers are asked for bare JSON but regularly wrap it in a fenced code
block with prose around it, so the fenced form is tried first.
"""
from __future__ import annotations

import json
import re
from typing import Any

from jobscout.errors import empty_error, parse_error
from jobscout.log import get_logger

log = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def parse_json_response(text: str | None, what: str = "reading the AI response") -> Any:
    """Return the JSON value embedded in ``text``.

    Raises a PROVIDER_EMPTY error for blank input and a PARSE error when
    neither the fenced block nor the whole text is valid JSON.
    """
    if not isinstance(text, str) or not text.strip():
        raise empty_error(what)

    match = _FENCE_RE.search(text)
    if match and match.group(1):
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            log.debug("Fenced block is not valid JSON, trying the whole text")

    try:
        return json.loads(text.strip())
    except json.JSONDecodeError as exc:
        log.warning("Unparsable AI response while %s: %s", what, exc)
        log.debug("Raw AI response: %r", text[:2000])
        raise parse_error(what, detail=str(exc)) from exc


# ── Coercion helpers ─────────────────────────────────────────────────────


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip() or default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def as_optional_str(value: Any) -> str | None:
    text = as_str(value)
    return text or None


def as_str_list(value: Any, *, split: bool = False) -> list[str]:
    """List of non-empty strings; a bare string becomes one item, or is
    split on commas when ``split`` is set (tag-like fields)."""
    if isinstance(value, str):
        if split:
            return [part.strip() for part in value.split(",") if part.strip()]
        return [value.strip()] if value.strip() else []
    return [s for s in (as_str(v) for v in as_list(value)) if s]
