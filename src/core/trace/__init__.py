"""Core Trace - Task profiling for build runs.

This module records start/stop timings of build tasks and writes them
as a Chrome trace file.
"""

from core.trace.clock import Clock, SystemClock
from core.trace.errors import (
    DuplicateTaskError,
    ManifestError,
    ProfilerError,
    TaskError,
    TaskStateError,
    UnknownTaskError,
)
from core.trace.manifest import read_package_name
from core.trace.profiler import Profiler

__all__ = [
    "Clock",
    "SystemClock",
    "Profiler",
    "ProfilerError",
    "TaskError",
    "DuplicateTaskError",
    "UnknownTaskError",
    "TaskStateError",
    "ManifestError",
    "read_package_name",
]
