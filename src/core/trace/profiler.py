"""Profiler - Records task timings and writes them as a Chrome trace.

The output file follows the Trace Event Format read by chrome://tracing
and Perfetto: every task becomes one complete ("X") event, with the task
id used as the thread id so each task gets its own lane.
"""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from core.settings import Settings
from core.trace.clock import Clock, SystemClock, to_json_time
from core.trace.errors import DuplicateTaskError, TaskStateError, UnknownTaskError
from core.trace.manifest import DEFAULT_MANIFEST_NAME, read_package_name
from core.types import ProfileEntry, TaskState
from observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FILE_PREFIX = "just-tasks-Profile"
DEFAULT_SOURCE = "just-tasks profiler"
DISPLAY_TIME_UNIT = "ms"


def _ns_to_us(value: int) -> float:
    return value / 1000


class Profiler:
    """Keeps track of task timings for one build run.

    Attributes:
        output_dir: Directory the profile file is written to
        start_time: Wall time the session started
        end_time: Wall time the profile was written, None until write()
    """

    def __init__(
        self,
        output_dir: str | Path | None = None,
        clock: Clock | None = None,
        file_prefix: str = DEFAULT_FILE_PREFIX,
        source: str = DEFAULT_SOURCE,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        strict_manifest: bool = False,
        indent: int | None = None,
    ) -> None:
        """Initialize the profiler.

        Args:
            output_dir: Where to write the profile file. Defaults to the
                current working directory.
            clock: Time/identity source. Defaults to SystemClock.
            file_prefix: Prefix of the profile file name.
            source: Source label written to otherData.
            manifest_name: Manifest file read for package names.
            strict_manifest: Raise ManifestError on invalid manifests.
            indent: JSON indent; None writes compact JSON.
        """
        self._clock = clock or SystemClock()
        self.output_dir = Path(output_dir) if output_dir else Path(self._clock.cwd())
        self.file_prefix = file_prefix
        self.source = source
        self.manifest_name = manifest_name
        self.strict_manifest = strict_manifest
        self.indent = indent
        self.start_time: datetime = self._clock.now()
        self.end_time: datetime | None = None
        self._entries: dict[int, ProfileEntry] = {}

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock | None = None) -> "Profiler":
        """Create a profiler from the profiler section of the settings."""
        config = settings.profiler
        return cls(
            output_dir=config.output_dir,
            clock=clock,
            file_prefix=config.file_prefix,
            source=config.source,
            manifest_name=config.manifest_name,
            strict_manifest=config.strict_manifest,
            indent=config.indent,
        )

    @property
    def entries(self) -> list[ProfileEntry]:
        """Recorded entries ordered by task id."""
        return [self._entries[task_id] for task_id in sorted(self._entries)]

    def get_entry(self, task_id: int) -> ProfileEntry | None:
        return self._entries.get(task_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._entries

    def start(self, task_id: int, name: str) -> None:
        """Start a task.

        Args:
            task_id: Unique id of the task.
            name: Name of the task shown in the profile.

        Raises:
            DuplicateTaskError: If the id was already started.
            ManifestError: If strict_manifest is set and the working
                directory holds an invalid manifest.
        """
        if task_id in self._entries:
            raise DuplicateTaskError(task_id)

        start_time = self._clock.hrtime_ns()
        cwd = self._clock.cwd()
        package_name = read_package_name(cwd, self.manifest_name, strict=self.strict_manifest)

        self._entries[task_id] = ProfileEntry(
            id=task_id,
            name=name,
            ts=_ns_to_us(start_time),
            pid=self._clock.pid(),
            cwd=cwd,
            start_time=start_time,
            package_name=package_name,
        )
        logger.debug(f"Task {task_id} started: {name}")

    def stop(self, task_id: int, success: bool) -> None:
        """Record completion of a started task.

        Args:
            task_id: Id of the task; must match a started task.
            success: Whether the task passed.

        Raises:
            UnknownTaskError: If the id was never started.
            TaskStateError: If the task has already stopped.
        """
        entry = self._entries.get(task_id)
        if entry is None:
            raise UnknownTaskError(task_id)
        if entry.finished:
            raise TaskStateError(task_id, entry.state.value)

        entry.dur = _ns_to_us(self._clock.hrtime_ns() - entry.start_time)
        entry.state = TaskState.SUCCEEDED if success else TaskState.FAILED
        logger.debug(f"Task {task_id} {entry.state.value} after {entry.dur / 1000:.1f}ms")

    @contextmanager
    def task(self, task_id: int, name: str) -> Iterator[ProfileEntry]:
        """Profile the enclosed block as one task.

        The task is stopped as failed if the block raises; the exception
        still propagates. A task the block already stopped (or dropped via
        reset()) is left as it is.

        Example:
            >>> with profiler.task(1, "build"):
            ...     run_build()
        """
        self.start(task_id, name)
        try:
            yield self._entries[task_id]
        except BaseException:
            self._stop_if_running(task_id, success=False)
            raise
        self._stop_if_running(task_id, success=True)

    def _stop_if_running(self, task_id: int, success: bool) -> None:
        entry = self._entries.get(task_id)
        if entry is not None and not entry.finished:
            self.stop(task_id, success)

    def reset(self) -> None:
        """Drop all recorded entries so ids can be started again."""
        self._entries.clear()

    def file_name(self, end_time: datetime) -> str:
        """Profile file name for a given end time."""
        stamp = to_json_time(end_time).replace("-", "").replace(":", "")
        return f"{self.file_prefix}-{stamp}.json"

    def to_trace_data(self) -> dict[str, Any]:
        """Build the trace document.

        Uses the recorded end time once write() has run, the current time
        otherwise.
        """
        end_time = self.end_time or self._clock.now()
        return {
            "traceEvents": [entry.to_dict() for entry in self.entries],
            "displayTimeUnit": DISPLAY_TIME_UNIT,
            "otherData": {
                "source": self.source,
                "startTime": to_json_time(self.start_time),
                "endTime": to_json_time(end_time),
            },
        }

    def write(self) -> None:
        """Write the collected profile into the output directory.

        The directory is created if needed and an existing file of the
        same name is overwritten.

        Raises:
            OSError: If the file cannot be written.
        """
        self.end_time = self._clock.now()
        path = self.output_dir / self.file_name(self.end_time)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_trace_data(), f, indent=self.indent)
            f.write("\n")

        logger.info(f"Profile written to {path} ({len(self._entries)} tasks)")
