"""
Clock -- injectable time source.

Responsibility:
    Lets timestamp-based node ids be generated without domain code calling
    ``datetime.now()`` directly, so tests can pin time.

Architecture position:
    Kernel > Domain.  ``SystemClock`` is the one sanctioned I/O boundary
    for time.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """
    Abstract clock interface.

    Guarantees:
        - ``now()`` returns a timezone-aware UTC ``datetime``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...


class SystemClock(Clock):
    """Production clock that returns actual system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    ``now()`` returns the same value until ``advance()`` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(
            2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        self._advance_ms = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(milliseconds=self._advance_ms)

    def advance(self, milliseconds: int = 1) -> None:
        """Advance the clock by the specified milliseconds."""
        self._advance_ms += milliseconds
