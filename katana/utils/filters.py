"""Deduplication and cycle detection filters."""

from __future__ import annotations

import hashlib
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

MAX_CHROME_URL_LENGTH = 2097152
MIN_SEQUENCE_LENGTH = 10
MAX_SEQUENCE_COUNT = 10


class Filter(ABC):
    """Interface of a deduplication mechanism."""

    @abstractmethod
    def close(self) -> None:
        """Release the resources held by the filter."""

    @abstractmethod
    def unique_url(self, url: str) -> bool:
        """Return True the first time a URL is seen."""

    @abstractmethod
    def unique_content(self, content: bytes) -> bool:
        """Return True the first time a piece of content is seen."""

    @abstractmethod
    def is_cycle(self, url: str) -> bool:
        """Return True if the URL looks like a navigation loop."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@dataclass(frozen=True)
class RepeatingSequence:
    """The longest non-overlapping repeated substring and its occurrence count."""

    sequence: str
    count: int


def longest_repeating_sequence(text: str) -> RepeatingSequence:
    """Find the longest substring that occurs at least twice without overlap."""
    n = len(text)
    best_length = 0
    best_end = 0
    previous = [0] * (n + 1)
    for i in range(1, n + 1):
        current = [0] * (n + 1)
        char = text[i - 1]
        for j in range(i + 1, n + 1):
            if char == text[j - 1] and previous[j - 1] < j - i:
                length = previous[j - 1] + 1
                current[j] = length
                if length > best_length:
                    best_length = length
                    best_end = i
        previous = current
    sequence = text[best_end - best_length:best_end] if best_length else ""
    return RepeatingSequence(sequence, text.count(sequence))


class SimpleFilter(Filter):
    """In-memory filter without any URL normalisation."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    def _add(self, key: str) -> bool:
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
            return True

    def unique_url(self, url: str) -> bool:
        return self._add(url)

    def unique_content(self, content: bytes) -> bool:
        if isinstance(content, str):
            content = content.encode()
        return self._add(hashlib.md5(content).hexdigest())

    def is_cycle(self, url: str) -> bool:
        if len(url) > MAX_CHROME_URL_LENGTH:
            return True
        found = longest_repeating_sequence(url)
        return found.count >= MAX_SEQUENCE_COUNT and len(found.sequence) > MIN_SEQUENCE_LENGTH

    def close(self) -> None:
        with self._lock:
            self._seen.clear()