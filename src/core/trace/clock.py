"""Clock - Time and process identity source for the profiler.

All process-wide state the profiler reads (clocks, pid, working directory)
goes through a Clock so tests can substitute a deterministic one.
"""

import os
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Abstract time/identity source."""

    @abstractmethod
    def hrtime_ns(self) -> int:
        """Return a monotonic high-resolution time in nanoseconds."""
        pass

    @abstractmethod
    def now(self) -> datetime:
        """Return the current wall time as a timezone-aware UTC datetime."""
        pass

    @abstractmethod
    def pid(self) -> int:
        """Return the current process id."""
        pass

    @abstractmethod
    def cwd(self) -> str:
        """Return the current working directory."""
        pass


class SystemClock(Clock):
    """Clock backed by the running process."""

    def hrtime_ns(self) -> int:
        return time.perf_counter_ns()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def pid(self) -> int:
        return os.getpid()

    def cwd(self) -> str:
        return os.getcwd()


def to_json_time(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and a 'Z' suffix.

    Naive datetimes are taken to be UTC already.

    Example:
        >>> to_json_time(datetime(2026, 10, 16, 9, 5, 3, 42000, tzinfo=timezone.utc))
        '2026-10-16T09:05:03.042Z'
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
