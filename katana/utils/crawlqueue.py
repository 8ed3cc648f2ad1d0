"""Depth-first and breadth-first work queues for the crawler."""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from collections import deque
from collections.abc import Iterator
from enum import Enum
from typing import Any


class Strategy(Enum):
    """Order in which queued items are handed out."""

    BREADTH_FIRST = "breadth-first"
    DEPTH_FIRST = "depth-first"

    @classmethod
    def from_name(cls, name: str) -> "Strategy":
        try:
            return cls(name)
        except ValueError:
            raise ValueError("unsupported strategy") from None

    def __str__(self) -> str:
        return self.value


class PriorityQueue:
    """Min-priority queue: lower priority values come out first."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, Any]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, value: Any, priority: int) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), value))

    def pop(self) -> Any:
        """Remove and return the lowest-priority value, or None if empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]


class Stack:
    """Last-in, first-out stack."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def push(self, value: Any) -> None:
        self._items.append(value)

    def pop(self) -> Any:
        """Remove and return the newest value, or None if empty."""
        return self._items.pop() if self._items else None


class CrawlQueue:
    """Thread-safe queue using either a stack or a priority queue."""

    def __init__(self, strategy_name: str, timeout: int) -> None:
        self.strategy = Strategy.from_name(strategy_name)
        self.timeout = float(timeout)
        self._lock = threading.Lock()
        self._stack = Stack()
        self._priority_queue = PriorityQueue()

    def _store(self):
        if self.strategy is Strategy.BREADTH_FIRST:
            return self._priority_queue
        return self._stack

    def __len__(self) -> int:
        with self._lock:
            return len(self._store())

    def push(self, value: Any, priority: int = 0) -> None:
        with self._lock:
            if self.strategy is Strategy.BREADTH_FIRST:
                self._priority_queue.push(value, priority)
            else:
                self._stack.push(value)

    def pop(self) -> Iterator[Any]:
        """Yield items as they become available.

        The generator ends once the queue has stayed empty for longer
        than the timeout since the last item was handed out.
        """
        start = time.monotonic()
        while True:
            with self._lock:
                store = self._store()
                has_item = len(store) > 0
                item = store.pop() if has_item else None
            if has_item:
                yield item
                start = time.monotonic()
                continue
            if time.monotonic() - start <= self.timeout:
                time.sleep(1)
                continue
            return