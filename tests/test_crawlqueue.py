import threading

import pytest

from katana.utils.crawlqueue import CrawlQueue, PriorityQueue, Stack, Strategy


def test_priority_queue():
    queue = PriorityQueue()
    queue.push("lower", 3)
    queue.push("higher", 4)
    queue.push("lowest", 1)
    assert queue.pop() == "lowest"
    assert queue.pop() == "lower"
    assert queue.pop() == "higher"
    assert queue.pop() is None


def test_stack():
    queue = Stack()
    queue.push("lower")
    queue.push("higher")
    queue.push("lowest")
    assert len(queue) == 3
    assert queue.pop() == "lowest"
    assert queue.pop() == "higher"
    assert queue.pop() == "lower"
    assert queue.pop() is None


def test_strategy_names():
    assert Strategy.from_name("depth-first") is Strategy.DEPTH_FIRST
    assert str(Strategy.BREADTH_FIRST) == "breadth-first"


def test_unsupported_strategy():
    with pytest.raises(ValueError, match="unsupported strategy"):
        CrawlQueue("random", 1)


def test_breadth_first_queue_drains_by_priority():
    queue = CrawlQueue("breadth-first", 0)
    queue.push("b", 2)
    queue.push("a", 1)
    queue.push("c", 3)
    assert len(queue) == 3
    assert list(queue.pop()) == ["a", "b", "c"]
    assert len(queue) == 0


def test_depth_first_queue_is_lifo():
    queue = CrawlQueue("depth-first", 0)
    for value in ("x", "y", "z"):
        queue.push(value, 0)
    assert list(queue.pop()) == ["z", "y", "x"]


def test_pop_waits_for_late_items():
    queue = CrawlQueue("depth-first", 2)
    timer = threading.Timer(0.3, queue.push, args=("late", 0))
    timer.start()
    try:
        assert list(queue.pop()) == ["late"]
    finally:
        timer.cancel()