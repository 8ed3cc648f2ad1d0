"""Selection of URL parts and custom values for output and per-host storage."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from katana.output.custom_field import FIELD_NAMES, CustomFieldError
from katana.output.result import Result
from katana.utils.publicsuffix import effective_tld_plus_one

logger = logging.getLogger(__name__)

DEFAULT_STORE_FIELD_DIR = "katana_field"


@dataclass(frozen=True)
class FieldOutput:
    """One named value selected from a result."""

    field: str
    value: str


@dataclass(frozen=True)
class _Url:
    scheme: str
    host: str
    hostname: str
    path: str
    text: str
    query: dict[str, list[str]] = field(default_factory=dict)

    @property
    def root(self) -> str:
        return f"{self.scheme}://{self.host}"

    @property
    def rdn(self) -> str:
        try:
            return effective_tld_plus_one(self.hostname)
        except ValueError:
            return ""

    def encoded_query(self) -> str:
        return urlencode([(key, value) for key, values in self.query.items() for value in values])

    def base_name(self) -> str:
        trimmed = self.path.rstrip("/")
        if not trimmed:
            return "/" if self.path else "."
        return trimmed.rsplit("/", 1)[-1]

    def has_file(self) -> bool:
        return self.path not in ("", "/") and "." in self.base_name()

    def directory(self) -> str:
        """Return the directory part of the path, or '' when there is none."""
        if self.path in ("", "/") or "/" not in self.path[1:]:
            return ""
        return self.path[: self.path[1:].rfind("/") + 2]


def _parse(url: str) -> _Url:
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    if host.startswith("["):
        end = host.find("]")
        hostname = host[1:end] if end >= 0 else host[1:]
    else:
        hostname = host.partition(":")[0]
    query: dict[str, list[str]] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        query.setdefault(key, []).append(value)
    return _Url(
        scheme=parts.scheme,
        host=host,
        hostname=hostname,
        path=parts.path,
        text=urlunsplit(parts),
        query=query,
    )


def _split_names(fields: str) -> list[str]:
    return [name for name in fields.split(",") if name]


def validate_field_names(names: str, custom_fields: Mapping | Iterable[str] | None = None) -> list[str]:
    """Check a comma list of field names and return them.

    Names must be built-in fields or among ``custom_fields``.
    """
    known = set(FIELD_NAMES)
    if isinstance(custom_fields, Mapping):
        known.update(getattr(config, "name", name) for name, config in custom_fields.items())
    elif custom_fields is not None:
        known.update(custom_fields)
    parts = names.split(",")
    for part in parts:
        if part not in known:
            raise CustomFieldError(f"invalid field {part} specified: {names}")
    return parts


def format_field(result: Result, fields: str) -> list[FieldOutput]:
    """Return the values of the comma-separated ``fields`` for a result."""
    url = result.request.url
    try:
        parsed = _parse(url)
    except ValueError:
        return []

    keys = list(parsed.query)
    values = [value for group in parsed.query.values() for value in group]
    pairs = [f"{key}={value}" for key, group in parsed.query.items() for value in group]

    out: list[FieldOutput] = []
    for name in _split_names(fields):
        if name == "url":
            out.append(FieldOutput("url", url))
        elif name == "rdn":
            out.append(FieldOutput("rdn", parsed.rdn))
        elif name == "path":
            if parsed.path:
                out.append(FieldOutput("path", parsed.path))
        elif name == "fqdn":
            out.append(FieldOutput("fqdn", parsed.hostname))
        elif name == "rurl":
            out.append(FieldOutput("rurl", parsed.root))
        elif name == "qpath":
            if keys:
                out.append(FieldOutput("qpath", f"{parsed.path}?{parsed.encoded_query()}"))
        elif name == "qurl":
            if keys:
                out.append(FieldOutput("qurl", url))
        elif name == "key":
            out.extend(FieldOutput("key", key) for key in keys)
        elif name == "kv":
            out.extend(FieldOutput("kv", pair) for pair in pairs)
        elif name == "value":
            out.extend(FieldOutput("value", value) for value in values)
        elif name == "file":
            if parsed.has_file():
                out.append(FieldOutput("file", parsed.base_name()))
        elif name == "ufile":
            if parsed.has_file():
                out.append(FieldOutput("ufile", parsed.text))
        elif name == "udir":
            directory = parsed.directory()
            if directory:
                out.append(FieldOutput("udir", parsed.root + directory))
        elif name == "dir":
            directory = parsed.directory()
            if directory:
                out.append(FieldOutput("dir", directory))
        else:
            out.extend(FieldOutput(name, value) for value in result.request.custom_fields.get(name, ()))
    return out


def _value(result: Result, parsed: _Url, name: str) -> str:
    if name == "url":
        return result.request.url
    if name == "path":
        return parsed.path
    if name == "fqdn":
        return parsed.hostname
    if name == "rdn":
        return parsed.rdn
    if name == "rurl":
        return parsed.root
    if name == "ufile":
        return parsed.text if parsed.has_file() else ""
    if name == "file":
        return parsed.base_name() if parsed.has_file() else ""
    if name == "dir":
        return parsed.directory()
    if name == "udir":
        directory = parsed.directory()
        return parsed.root + directory if directory else ""
    if name == "qpath":
        return f"{parsed.path}?{parsed.encoded_query()}" if parsed.query else ""
    if name == "qurl":
        return parsed.text if parsed.query else ""
    if name == "key":
        return "\n".join(parsed.query)
    if name == "value":
        return "\n".join(value for group in parsed.query.values() for value in group)
    if name == "kv":
        return "\n".join(f"{key}={value}" for key, group in parsed.query.items() for value in group)
    return ""


def value_for_field(result: Result, url: str, field: str) -> str:
    """Return the value of one built-in field of ``url`` joined by newlines, or ''."""
    return _value(result, _parse(url), field)


def custom_field_values(result: Result) -> list[FieldOutput]:
    """Return every custom field value carried by the result's request."""
    return [
        FieldOutput(name, value)
        for name, values in result.request.custom_fields.items()
        for value in values
    ]


def _append(directory: str, parsed: _Url, name: str, data: str) -> None:
    path = os.path.join(directory, f"{parsed.scheme}_{parsed.hostname}_{name}.txt")
    try:
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(data)
            handle.write("\n")
    except OSError:
        return


def store_fields(
    result: Result,
    fields: Iterable[str] | str,
    custom_fields: Mapping | Iterable[str] | None = None,
    directory: str = DEFAULT_STORE_FIELD_DIR,
) -> None:
    """Append the field values of a result to per-host files in ``directory``."""
    try:
        parsed = _parse(result.request.url)
    except ValueError as exc:
        logger.warning("store_fields: failed to parse url %s got %s", result.request.url, exc)
        return
    names = _split_names(fields) if isinstance(fields, str) else list(fields)
    custom = set(custom_fields) if custom_fields is not None else set()
    for name in names:
        value = _value(result, parsed, name)
        if value:
            _append(directory, parsed, name, value)
        if name in custom:
            for out in custom_field_values(result):
                _append(directory, parsed, out.field, out.value)