"""Buffered line-oriented output file."""

from __future__ import annotations

import os
from pathlib import Path


class FileWriter:
    """Writes records to a file, one per line, truncating it on open."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._file = open(self.path, "wb")

    def write(self, data: bytes | str) -> None:
        """Write one record followed by a newline."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._file.write(data)
        self._file.write(b"\n")

    def close(self) -> None:
        """Flush everything to disk and close the file."""
        if self._file.closed:
            return
        self._file.flush()
        try:
            os.fsync(self._file.fileno())
        except OSError:
            pass
        self._file.close()

    def __enter__(self) -> "FileWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()