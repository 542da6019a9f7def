"""
Node id generation.

New task ids are opaque to callers.  A generator is handed the ids that
already exist and must return one that is not among them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection

from workflow_kernel.domain.clock import Clock, SystemClock

TASK_ID_PREFIX = "task"


class NodeIdGenerator(ABC):
    """Produces fresh task node ids."""

    @abstractmethod
    def next_id(self, existing: Collection[str]) -> str:
        """Return an id not contained in ``existing``."""
        ...


class SequentialIdGenerator(NodeIdGenerator):
    """Counter-based ids: ``task-1``, ``task-2``, ...

    Deterministic for a given starting counter, which makes it the
    default for tests and replay.
    """

    def __init__(self, start: int = 1, prefix: str = TASK_ID_PREFIX):
        self._counter = start
        self._prefix = prefix

    def next_id(self, existing: Collection[str]) -> str:
        while True:
            candidate = f"{self._prefix}-{self._counter}"
            self._counter += 1
            if candidate not in existing:
                return candidate


class TimestampIdGenerator(NodeIdGenerator):
    """Millisecond timestamp ids: ``task-1704110400000``.

    Two inserts inside the same millisecond get consecutive values.
    """

    def __init__(self, clock: Clock | None = None, prefix: str = TASK_ID_PREFIX):
        self._clock = clock or SystemClock()
        self._prefix = prefix
        self._last = 0

    def next_id(self, existing: Collection[str]) -> str:
        stamp = max(int(self._clock.now().timestamp() * 1000), self._last + 1)
        while f"{self._prefix}-{stamp}" in existing:
            stamp += 1
        self._last = stamp
        return f"{self._prefix}-{stamp}"
