"""Small helpers shared across the package."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

_JSON_HEADERS = {"Content-Type": "application/json; charset=UTF-8"}

_HTML_ESCAPES = {
    "&": "&amp;",
    "'": "&#39;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
}

_JSON_SAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def contains(source: str, sources) -> bool:
    """Return True if source equals any entry of sources, ignoring case."""
    folded = source.casefold()
    return any(entry.casefold() == folded for entry in sources)


def _escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(char, char) for char in text)


def _default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _encode(data: Any) -> str:
    text = json.dumps(
        data,
        default=_default,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
    )
    for char, replacement in _JSON_SAFE.items():
        text = text.replace(char, replacement)
    return text + "\n"


def _error_body(error: BaseException) -> str:
    return '{ "message": "%s" }' % _escape_html(str(error))


def json_response(data: Any, error: BaseException | None = None) -> tuple[int, dict[str, str], str]:
    """Build an HTTP JSON response as (status, headers, body)."""
    headers = dict(_JSON_HEADERS)
    if error is not None:
        return 500, headers, _error_body(error)
    try:
        body = _encode(data)
    except (TypeError, ValueError) as exc:
        return 500, headers, _error_body(exc)
    return 200, headers, body