"""
Pytest configuration and shared fixtures for the just-tasks profiler test suite.

This module provides common fixtures used across unit and integration tests.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add the project root and src directories to the Python path
PROJECT_ROOT = Path(__file__).parent.parent
SRC_ROOT = PROJECT_ROOT / "src"

for path in [str(SRC_ROOT), str(PROJECT_ROOT)]:
    if path not in sys.path:
        sys.path.insert(0, path)

from core.trace.clock import Clock  # noqa: E402


class FakeClock(Clock):
    """Deterministic clock; time only moves when advance() is called."""

    def __init__(self, cwd: str | Path, pid: int = 4242) -> None:
        self._hrtime_ns = 5_000_000_000
        self._now = datetime(2026, 10, 16, 9, 5, 3, 42000, tzinfo=timezone.utc)
        self._pid = pid
        self._cwd = str(cwd)

    def advance(self, seconds: float) -> None:
        self._hrtime_ns += int(seconds * 1_000_000_000)
        self._now += timedelta(seconds=seconds)

    def set_cwd(self, cwd: str | Path) -> None:
        self._cwd = str(cwd)

    def hrtime_ns(self) -> int:
        return self._hrtime_ns

    def now(self) -> datetime:
        return self._now

    def pid(self) -> int:
        return self._pid

    def cwd(self) -> str:
        return self._cwd


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Return the path to the config directory."""
    return project_root / "config"


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Return an empty directory used as the tasks' working directory."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def fake_clock(workdir: Path) -> FakeClock:
    """Return a FakeClock whose working directory is `workdir`."""
    return FakeClock(cwd=workdir)
