"""Small parsing helpers for URLs and HTML tag values."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_WEB_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/113.0.0.0 Safari/537.36"
)
_SRCSET_SPACE = " \t\n\f\r"


def is_url(value: str) -> bool:
    """Return True if ``value`` parses as a URL with a hostname."""
    try:
        return bool(urlsplit(value).hostname)
    except ValueError:
        return False


def parse_srcset_tag(value: str) -> list[str]:
    """Return the URLs of the image candidates of a srcset value."""
    urls: list[str] = []
    pos, end = 0, len(value)
    while True:
        while pos < end and (value[pos] in _SRCSET_SPACE or value[pos] == ","):
            pos += 1
        if pos >= end:
            return urls
        start = pos
        while pos < end and value[pos] not in _SRCSET_SPACE:
            pos += 1
        url = value[start:pos]
        if url.endswith(","):
            urls.append(url.rstrip(","))
            continue
        depth = 0
        while pos < end:
            char = value[pos]
            pos += 1
            if char == "(":
                depth += 1
            elif char == ")" and depth:
                depth -= 1
            elif char == "," and depth == 0:
                break
        urls.append(url)


def parse_link_tag(value: str) -> list[str]:
    """Return the URLs enclosed in angle brackets in a Link header value."""
    urls = []
    for chunk in value.split(","):
        for piece in chunk.split(";"):
            piece = piece.strip(" ")
            if piece.startswith("<") and piece.endswith(">"):
                urls.append(piece.strip("<>"))
    return urls


def parse_refresh_tag(value: str) -> str:
    """Return the URL of a refresh header value, or ''."""
    chunks = value.split("url=")
    if len(chunks) < 2:
        return ""
    chunk = chunks[1]
    return chunk[:-1] if chunk.endswith(";") else chunk


def web_user_agent() -> str:
    """Return the user agent of a desktop Chrome browser."""
    return _WEB_USER_AGENT


def flatten_headers(headers: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """Join multi-valued headers with ';'."""
    return {key: ";".join(values) for key, values in headers.items()}


def replace_all_query_param(request_url: str, value: str = "") -> str:
    """Blank out the value of every query parameter of ``request_url``.

    ``value`` is accepted but every parameter is set to the empty string.
    """
    try:
        parsed = urlsplit(request_url)
    except ValueError:
        return request_url
    keys = dict.fromkeys(key for key, _ in parse_qsl(parsed.query, keep_blank_values=True))
    query = urlencode([(key, "") for key in keys])
    return urlunsplit((parsed.scheme, parsed.netloc, parsed.path, query, parsed.fragment))