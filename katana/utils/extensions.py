"""File extension allow/deny validation for crawled URLs."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlsplit

DEFAULT_DENYLIST = (
    ".3g2", ".3gp", ".7z", ".apk", ".arj", ".avi", ".axd", ".bmp", ".csv",
    ".deb", ".dll", ".doc", ".drv", ".eot", ".exe", ".flv", ".gif", ".gifv",
    ".gz", ".h264", ".ico", ".iso", ".jar", ".jpeg", ".jpg", ".lock", ".m4a",
    ".m4v", ".map", ".mkv", ".mov", ".mp3", ".mp4", ".mpeg", ".mpg", ".msi",
    ".ogg", ".ogm", ".ogv", ".otf", ".pdf", ".pkg", ".png", ".ppt", ".psd",
    ".rar", ".rm", ".rpm", ".svg", ".swf", ".sys", ".tar.gz", ".tar", ".tif",
    ".tiff", ".ttf", ".txt", ".vob", ".wav", ".webm", ".webp", ".wmv",
    ".woff", ".woff2", ".xcf", ".xls", ".xlsx", ".zip",
)


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and make sure it starts with a dot."""
    extension = extension.lower()
    return extension if extension.startswith(".") else "." + extension


def _path_ext(path: str) -> str:
    """Return the suffix from the last dot of the final path element, or ''."""
    last = path.rsplit("/", 1)[-1]
    dot = last.rfind(".")
    return last[dot:] if dot >= 0 else ""


class Validator:
    """Decides whether a URL's file extension is allowed."""

    def __init__(
        self,
        extensions_match: Iterable[str] | None = None,
        extensions_filter: Iterable[str] | None = None,
    ) -> None:
        self.extensions_match = {normalize_extension(e) for e in extensions_match or ()}
        self.extensions_filter = {normalize_extension(e) for e in DEFAULT_DENYLIST}
        self.extensions_filter.update(normalize_extension(e) for e in extensions_filter or ())

    def validate_path(self, item: str) -> bool:
        """Return True if the extension of ``item`` is allowed."""
        try:
            path = urlsplit(item).path
        except ValueError:
            path = ""
        extension = _path_ext(path if path else item).lower()

        if self.extensions_match:
            return extension != "" and extension in self.extensions_match
        return extension not in self.extensions_filter