"""Observers that receive run snapshots."""

from __future__ import annotations

import queue
import sys
from typing import Protocol, runtime_checkable

from codearena.models import TestResult, TestStatus

_ICONS = {
    TestStatus.PASSED: "✓",
    TestStatus.FAILED: "✗",
    TestStatus.RUNNING: "⟳",
}


@runtime_checkable
class ProgressSink(Protocol):
    def publish(self, snapshot: tuple[TestResult, ...]) -> None: ...


class ListSink:
    """Keeps every snapshot it receives."""

    def __init__(self) -> None:
        self.snapshots: list[tuple[TestResult, ...]] = []

    def publish(self, snapshot: tuple[TestResult, ...]) -> None:
        self.snapshots.append(snapshot)

    @property
    def latest(self) -> tuple[TestResult, ...]:
        return self.snapshots[-1] if self.snapshots else ()


class QueueSink:
    """Forwards snapshots as SSE-ready events to a queue read by another thread."""

    def __init__(self, event_queue: queue.Queue) -> None:
        self._queue = event_queue

    def publish(self, snapshot: tuple[TestResult, ...]) -> None:
        self._queue.put({"type": "snapshot", "results": [r.to_dict() for r in snapshot]})


class ConsoleSink:
    """Prints each test case once it resolves."""

    def __init__(self, stream=None) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._printed = 0

    def publish(self, snapshot: tuple[TestResult, ...]) -> None:
        # Slots resolve in order, so everything before the first running slot is final
        while self._printed < len(snapshot) and snapshot[self._printed].status is not TestStatus.RUNNING:
            self._write(snapshot[self._printed])
            self._printed += 1

    def _write(self, result: TestResult) -> None:
        print(f"{_ICONS[result.status]} {result.message}", file=self._stream)
        if result.status is TestStatus.FAILED and result.input is not None:
            print(f"    Expected: {result.expected} | Got: {result.actual}", file=self._stream)
        if result.error:
            for line in result.error.rstrip().splitlines():
                print(f"    {line}", file=self._stream)
