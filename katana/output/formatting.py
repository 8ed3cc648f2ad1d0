"""Rendering of results for the screen and as JSON."""

from __future__ import annotations

import json

from katana.output.fields import format_field
from katana.output.result import Result

_BLUE = 34
_GREEN = 32


def _paint(text: str, code: int, colors: bool) -> str:
    return f"\x1b[{code}m{text}\x1b[0m" if colors else text


def _label(text: str, code: int, colors: bool) -> str:
    return f"[{_paint(text, code, colors)}] "


def format_screen(result: Result, fields: str = "", verbose: bool = False, colors: bool = False) -> str:
    """Return the screen form of a result."""
    request = result.request
    if fields:
        return "".join(
            (_label(out.field, _BLUE, colors) if verbose else "") + f"{out.value}\n"
            for out in format_field(result, fields)
        )

    parts = []
    if verbose and request.tag:
        parts.append(_label(request.tag, _BLUE, colors))
    if verbose and request.method:
        parts.append(_label(request.method, _GREEN, colors))
    parts.append(request.url)
    if verbose and request.body:
        parts.append(f" [{request.body}]")
    return "".join(parts)


def format_json(result: Result) -> str:
    """Return the JSON form of a result, or '' when it carries custom fields."""
    if result.request is not None and result.request.custom_fields:
        return ""
    return json.dumps(result.to_dict(), separators=(",", ":"), ensure_ascii=False)