"""Regular expressions that pull endpoints out of page bodies and scripts."""

from __future__ import annotations

import re

_BODY_PATTERN = (
    r"(?:("
    r"(?:\.\./[A-Za-z0-9\-_/\\?&@.=%]+)"
    r"|(https?://[A-Za-z0-9_\-.]+(?:\.\./)?/[A-Za-z0-9\-_/\\?&@.=%]+)"
    r"|(/[A-Za-z0-9\-_/\\?&@.%]+\.(aspx?|action|cfm|cgi|do|pl|css|x?html?|js(?:p|on)?|pdf|php5?|py|rss))"
    r"|([A-Za-z0-9\-_?&@.%]+/[A-Za-z0-9/\\\-_?&@.%]+\.(aspx?|action|cfm|cgi|do|pl|css|x?html?|js(?:p|on)?|pdf|php5?|py|rss))"
    r"))"
)

_JS_PATTERN = (
    r"""(?:"|'|\s)("""
    r"""((https?://[A-Za-z0-9_\-.]+(?:\:\d{1,5})?)+(?:\.\./)?/[A-Za-z0-9/\-_\\.%]+(?:[\?|#][^"']+)?)"""
    r"""|((?:\.\./)?[a-zA-Z0-9\-_/\\%]+\.(aspx?|js(?:on|p)?|html|php5?|action|do)(?:[\?|#][^"']+)?)"""
    r"""|((?:\.\./)[a-zA-Z0-9\-_/\\%]+(?:/|\\)[a-zA-Z0-9\-_]{3,}(?:[\?|#][^"']+)?)"""
    r"""|((?:\.\./)[a-zA-Z0-9\-_/\\%]{3,}/)"""
    r""")(?:"|'|\s)"""
)

PAGE_BODY_REGEX = re.compile(_BODY_PATTERN, re.ASCII)
RELATIVE_ENDPOINTS_REGEX = re.compile(_JS_PATTERN, re.ASCII)


def _unique_first_groups(pattern: re.Pattern[str], data: str) -> list[str]:
    seen: dict[str, None] = {}
    for match in pattern.finditer(data):
        seen.setdefault(match.group(1) or "", None)
    return list(seen)


def extract_body_endpoints(data: str) -> list[str]:
    """Return the distinct endpoints found in a page body, in order of appearance."""
    return _unique_first_groups(PAGE_BODY_REGEX, data)


def extract_relative_endpoints(data: str) -> list[str]:
    """Return the distinct endpoints found in JavaScript, in order of appearance."""
    return _unique_first_groups(RELATIVE_ENDPOINTS_REGEX, data)