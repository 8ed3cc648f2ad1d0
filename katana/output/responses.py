"""On-disk storage of raw requests and responses."""

from __future__ import annotations

import contextlib
import hashlib
import os
from urllib.parse import urlsplit

from katana.output.result import Result

INDEX_FILE = "index.txt"


def response_hash(url: str) -> str:
    """Return the hex SHA-1 digest of a URL."""
    return hashlib.sha1(url.encode("utf-8")).hexdigest()


def format_stored_response(result: Result) -> str:
    """Return the stored form of a result: URL, raw request and raw response."""
    response_raw = result.response.raw if result.response else ""
    return f"{result.request.url}\n\n\n{result.request.raw}\n\n{response_raw}"


def response_host(url: str) -> str:
    """Return the host (with port) of a URL; raises ValueError if it cannot be parsed."""
    return urlsplit(url).netloc.rpartition("@")[2]


def response_file_name(folder: str, domain: str, url: str) -> str:
    """Return the file a response for ``url`` is stored in, creating its host directory."""
    host_dir = os.path.join(folder, domain)
    with contextlib.suppress(OSError):
        os.makedirs(host_dir, exist_ok=True)
    return os.path.join(host_dir, response_hash(url) + ".txt")


def update_index(folder: str, result: Result) -> None:
    """Append a line for ``result`` to the index file, which must already exist."""
    url = result.request.url
    domain = response_host(url)
    status = ""
    if result.response is not None and result.response.resp is not None:
        status = result.response.resp.status
    line = f"{response_file_name(folder, domain, url)} {url} ({status})\n"
    fd = os.open(os.path.join(folder, INDEX_FILE), os.O_WRONLY | os.O_APPEND)
    with os.fdopen(fd, "a", encoding="utf-8") as index:
        index.write(line)