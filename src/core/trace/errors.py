"""Exceptions raised by the task profiler.

All of them signal caller misuse or a broken input file, never a
recoverable runtime condition.
"""

from pathlib import Path


class ProfilerError(Exception):
    """Base exception for profiler errors."""

    pass


class TaskError(ProfilerError):
    """Base exception for task protocol violations."""

    def __init__(self, message: str, task_id: int) -> None:
        super().__init__(message)
        self.task_id = task_id


class DuplicateTaskError(TaskError):
    """Raised when a task id is started a second time."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} has already been started", task_id)


class UnknownTaskError(TaskError):
    """Raised when stopping a task id that was never started."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} was never started", task_id)


class TaskStateError(TaskError):
    """Raised when stopping a task that has already stopped."""

    def __init__(self, task_id: int, state: str) -> None:
        super().__init__(f"Task {task_id} is not running (state: {state})", task_id)
        self.state = state


class ManifestError(ProfilerError):
    """Raised when a manifest exists but cannot be read or parsed."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path
