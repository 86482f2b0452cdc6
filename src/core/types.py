"""Core data types for task profiling.

This module defines the record kept for every profiled task invocation
and the lifecycle states it moves through.

Design Principles:
    - Serializable: Entries convert to trace-viewer dicts via to_dict()
    - Mutable: An entry is filled in at start and completed at stop
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


# Chrome trace "complete event" phase
COMPLETE_PHASE = "X"


class TaskState(str, Enum):
    """Lifecycle state of a profiled task."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ProfileEntry:
    """One profiled task invocation.

    Attributes:
        id: Caller-supplied task id
        name: Display name of the task
        ts: Start timestamp in microseconds (high-resolution clock epoch)
        pid: Owning process id
        cwd: Working directory when the task started
        start_time: Raw high-resolution start time in nanoseconds
        package_name: Name from the manifest file, if one was found
        state: Current lifecycle state
        dur: Duration in microseconds, set once the task stops
    """
    id: int
    name: str
    ts: float
    pid: int
    cwd: str
    start_time: int
    package_name: str | None = None
    state: TaskState = TaskState.RUNNING
    dur: float | None = None

    @property
    def tid(self) -> int:
        """Thread id in the trace schema; one lane per task."""
        return self.id

    @property
    def finished(self) -> bool:
        return self.state is not TaskState.RUNNING

    def to_dict(self) -> dict[str, Any]:
        """Convert to a trace event dict.

        Unknown values (dur before stop, packageName without a manifest)
        are omitted rather than written as null.
        """
        data: dict[str, Any] = {
            "name": self.name,
            "ph": COMPLETE_PHASE,
            "ts": self.ts,
            "pid": self.pid,
            "tid": self.tid,
        }
        if self.dur is not None:
            data["dur"] = self.dur
        data["id"] = self.id
        data["cwd"] = self.cwd
        if self.package_name is not None:
            data["packageName"] = self.package_name
        data["state"] = self.state.value
        data["startTime"] = self.start_time
        return data
