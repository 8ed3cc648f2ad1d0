"""Crawl results and error records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import datetime, timezone
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _omit_empty(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, "", 0, [], {})}


@dataclass
class HttpResponse:
    """The raw HTTP exchange behind a response: its status line and final URL."""

    status: str = ""
    url: str = ""


@dataclass
class Request:
    """A request made by the crawler."""

    url: str = ""
    method: str = ""
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    tag: str = ""
    attribute: str = ""
    source: str = ""
    raw: str = ""
    custom_fields: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class Response:
    """A response received by the crawler."""

    status_code: int = 0
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    content_length: int = 0
    raw: str = ""
    technologies: list[str] = field(default_factory=list)
    forms: list[Any] = field(default_factory=list)
    stored_response_path: str = ""
    resp: HttpResponse | None = None


def _request_dict(request: Request) -> dict[str, Any]:
    return _omit_empty({
        "method": request.method,
        "endpoint": request.url,
        "body": request.body,
        "headers": dict(request.headers),
        "tag": request.tag,
        "attribute": request.attribute,
        "source": request.source,
        "raw": request.raw,
    })


def _response_dict(response: Response) -> dict[str, Any]:
    return _omit_empty({
        "status_code": response.status_code,
        "headers": dict(response.headers),
        "body": response.body,
        "content_length": response.content_length,
        "raw": response.raw,
        "technologies": list(response.technologies),
        "forms": [asdict(f) if is_dataclass(f) else f for f in response.forms],
        "stored_response_path": response.stored_response_path,
    })


@dataclass
class Result:
    """One crawled endpoint."""

    request: Request | None = None
    response: Response | None = None
    error: str = ""
    timestamp: datetime = field(default_factory=_now)

    def has_response(self) -> bool:
        """Return True if the result carries a real HTTP response."""
        return self.response is not None and self.response.resp is not None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out empty members."""
        return _omit_empty({
            "timestamp": self.timestamp.isoformat(),
            "request": _request_dict(self.request) if self.request else None,
            "response": _response_dict(self.response) if self.response else None,
            "error": self.error,
        })


@dataclass
class ErrorRecord:
    """An error that occurred while crawling an endpoint."""

    endpoint: str = ""
    source: str = ""
    error: str = ""
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out empty members."""
        return _omit_empty({
            "timestamp": self.timestamp.isoformat(),
            "endpoint": self.endpoint,
            "source": self.source,
            "error": self.error,
        })