"""Crawl scope validation by hostname and URL patterns."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from enum import Enum
from urllib.parse import ParseResult, SplitResult, urlsplit

from katana.utils.publicsuffix import public_suffix


class ScopeError(ValueError):
    """Raised for invalid scope configuration or domains."""


class _DnsScopeField(Enum):
    DN = "dn"
    RDN = "rdn"
    FQDN = "fqdn"
    CUSTOM = "custom"


_NAMED_FIELDS = {"dn": _DnsScopeField.DN, "rdn": _DnsScopeField.RDN, "fqdn": _DnsScopeField.FQDN}


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ScopeError(f"could not compile regex {pattern}: {exc}") from exc


def _is_ip(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True


def get_domain_rdn_and_dn(domain: str) -> tuple[str, str]:
    """Return the registrable domain and its name without the public suffix."""
    if domain.startswith(".") or domain.endswith(".") or ".." in domain:
        raise ScopeError(f"publicsuffix: empty label in domain {domain!r}")
    suffix = public_suffix(domain)
    if len(domain) <= len(suffix):
        return domain, ""
    i = len(domain) - len(suffix) - 1
    if domain[i] != ".":
        return domain, ""
    start = 1 + domain.rfind(".", 0, i)
    return domain[start:], domain[start:i]


class ScopeManager:
    """Decides whether URLs fall inside the crawl scope."""

    def __init__(
        self,
        in_scope: Iterable[str] | None = None,
        out_of_scope: Iterable[str] | None = None,
        field_scope: str = "rdn",
        no_scope: bool = False,
    ) -> None:
        self.no_scope = no_scope
        self.field_pattern: re.Pattern[str] | None = None
        if field_scope in _NAMED_FIELDS:
            self.field_scope = _NAMED_FIELDS[field_scope]
        else:
            self.field_scope = _DnsScopeField.CUSTOM
            self.field_pattern = _compile(field_scope)
        self.in_scope = [_compile(p) for p in in_scope or ()]
        self.out_of_scope = [_compile(p) for p in out_of_scope or ()]

    def validate(self, url: str | SplitResult | ParseResult, root_hostname: str) -> bool:
        """Return True if ``url`` is in scope for a crawl rooted at ``root_hostname``."""
        if self.no_scope:
            return True
        parsed = urlsplit(url) if isinstance(url, str) else url
        hostname = parsed.hostname or ""
        dns_ok = self._validate_dns(hostname, root_hostname)
        if self.in_scope or self.out_of_scope:
            return self._validate_url(parsed.geturl()) and dns_ok
        return dns_ok

    def _validate_url(self, url: str) -> bool:
        if any(pattern.search(url) for pattern in self.out_of_scope):
            return False
        if not self.in_scope:
            return True
        return any(pattern.search(url) for pattern in self.in_scope)

    def _validate_dns(self, hostname: str, root_hostname: str) -> bool:
        if self.field_scope is _DnsScopeField.CUSTOM and self.field_pattern.search(hostname):
            return True
        if self.field_scope is _DnsScopeField.FQDN or _is_ip(hostname):
            return hostname.casefold() == root_hostname.casefold()
        rdn, dn = get_domain_rdn_and_dn(root_hostname)
        if self.field_scope is _DnsScopeField.DN:
            return dn in hostname
        if self.field_scope is _DnsScopeField.RDN:
            return hostname.endswith(rdn)
        return False