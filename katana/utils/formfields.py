"""Extraction of HTML forms and their parameter names."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

DEFAULT_FORM_ENCTYPE = "application/x-www-form-urlencoded"


@dataclass
class Form:
    """A form found in a page: where it submits and which fields it holds."""

    method: str = ""
    action: str = ""
    enctype: str = ""
    parameters: list[str] = field(default_factory=list)


def _replace_path(base: str, action: str) -> str:
    """Replace the path (and query and fragment) of ``base`` with those of ``action``."""
    parsed = urlsplit(base)
    rel = urlsplit(action)
    return urlunsplit((parsed.scheme, parsed.netloc, rel.path, rel.query, rel.fragment))


def _merge_path(base: str, action: str) -> str:
    """Append a relative ``action`` to the path of ``base``."""
    if not action:
        return base
    parsed = urlsplit(base)
    rel = urlsplit(action)
    path = parsed.path
    if rel.path:
        path = path.rstrip("/") + "/" + rel.path
    query = "&".join(q for q in (parsed.query, rel.query) if q)
    fragment = rel.fragment or parsed.fragment
    return urlunsplit((parsed.scheme, parsed.netloc, path, query, fragment))


def _resolve_action(action: str, base_url: str | None) -> str | None:
    """Return the absolute action, or None when the form must be skipped."""
    try:
        is_absolute = bool(urlsplit(action).scheme)
    except ValueError:
        return base_url or ""
    if is_absolute or action.startswith("//") or action.startswith("\\"):
        return action
    if base_url is None:
        return action
    try:
        urlsplit(base_url)
        if action.startswith("/"):
            return _replace_path(base_url, action)
        return _merge_path(base_url, action)
    except ValueError:
        return None


def parse_form_fields(html: str | BeautifulSoup | Tag, base_url: str | None = None) -> list[Form]:
    """Parse form, input, textarea and select elements from a document."""
    document = html if isinstance(html, Tag) else BeautifulSoup(html, "html.parser")
    forms: list[Form] = []
    for element in document.find_all("form"):
        action = element.get("action", "")
        method = element.get("method", "")
        enctype = element.get("enctype", "")

        if not method:
            method = "GET"
        if not enctype and method != "GET":
            enctype = DEFAULT_FORM_ENCTYPE

        resolved = _resolve_action(action, base_url)
        if resolved is None:
            continue

        form = Form(method=method.upper(), action=resolved, enctype=enctype)
        form.parameters = [
            control["name"]
            for control in element.find_all(["input", "textarea", "select"])
            if control.has_attr("name")
        ]
        if any((form.action, form.method, form.enctype)) or form.parameters:
            forms.append(form)
    return forms