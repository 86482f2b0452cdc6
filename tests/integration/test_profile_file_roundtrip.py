"""Integration tests for writing profile files to disk.

The written file is parsed back and checked against the Chrome trace
schema: a traceEvents array of complete events plus otherData metadata.
"""

import json
from pathlib import Path

import pytest

from core.trace.profiler import Profiler


def _read_profiles(directory: Path) -> list[Path]:
    return sorted(directory.glob("just-tasks-Profile-*.json"))


def _assert_trace_schema(data: dict) -> None:
    assert set(data) == {"traceEvents", "displayTimeUnit", "otherData"}
    assert isinstance(data["traceEvents"], list)
    assert data["displayTimeUnit"] == "ms"
    assert isinstance(data["otherData"], dict)
    for key in ("source", "startTime", "endTime"):
        assert isinstance(data["otherData"][key], str)
    for event in data["traceEvents"]:
        assert isinstance(event["name"], str)
        assert event["ph"] == "X"
        assert isinstance(event["ts"], (int, float))
        assert isinstance(event["pid"], int)
        assert isinstance(event["tid"], int)
        if "dur" in event:
            assert isinstance(event["dur"], (int, float))
            assert event["dur"] >= 0


class TestWriteProfile:
    """Test Profiler.write() output files."""

    def test_build_scenario(self, fake_clock, workdir: Path) -> None:
        profiler = Profiler(clock=fake_clock)
        profiler.start(1, "build")
        fake_clock.advance(0.5)
        profiler.stop(1, True)

        profiler.write()

        files = _read_profiles(workdir)
        assert [f.name for f in files] == ["just-tasks-Profile-20261016T090503.542Z.json"]
        data = json.loads(files[0].read_text(encoding="utf-8"))
        _assert_trace_schema(data)
        event = data["traceEvents"][0]
        assert event["name"] == "build"
        assert event["ph"] == "X"
        assert event["state"] == "succeeded"
        assert event["dur"] == 500_000.0
        assert event["pid"] == 4242
        assert event["tid"] == 1
        assert data["otherData"] == {
            "source": "just-tasks profiler",
            "startTime": "2026-10-16T09:05:03.042Z",
            "endTime": "2026-10-16T09:05:03.542Z",
        }

    def test_unstopped_task(self, fake_clock, workdir: Path) -> None:
        profiler = Profiler(clock=fake_clock)
        profiler.start(2, "lint")

        profiler.write()

        data = json.loads(_read_profiles(workdir)[0].read_text(encoding="utf-8"))
        _assert_trace_schema(data)
        event = data["traceEvents"][0]
        assert event["state"] == "running"
        assert "dur" not in event

    def test_empty_profile(self, fake_clock, workdir: Path) -> None:
        Profiler(clock=fake_clock).write()

        data = json.loads(_read_profiles(workdir)[0].read_text(encoding="utf-8"))
        _assert_trace_schema(data)
        assert data["traceEvents"] == []

    def test_package_name_written(self, fake_clock, workdir: Path) -> None:
        (workdir / "package.json").write_text('{"name": "just-scripts"}', encoding="utf-8")
        profiler = Profiler(clock=fake_clock)
        profiler.start(1, "build")
        profiler.stop(1, False)

        profiler.write()

        event = json.loads(_read_profiles(workdir)[0].read_text(encoding="utf-8"))["traceEvents"][0]
        assert event["packageName"] == "just-scripts"
        assert event["cwd"] == str(workdir)
        assert event["state"] == "failed"

    def test_creates_output_dir(self, fake_clock, tmp_path: Path) -> None:
        output_dir = tmp_path / "nested" / "profiles"
        profiler = Profiler(output_dir=output_dir, clock=fake_clock)

        profiler.write()

        assert len(_read_profiles(output_dir)) == 1

    def test_records_end_time(self, fake_clock, workdir: Path) -> None:
        profiler = Profiler(clock=fake_clock)
        fake_clock.advance(1)

        profiler.write()
        fake_clock.advance(10)

        assert profiler.end_time is not None
        assert profiler.to_trace_data()["otherData"]["endTime"] == "2026-10-16T09:05:04.042Z"

    def test_compact_by_default(self, fake_clock, workdir: Path) -> None:
        Profiler(clock=fake_clock).write()
        text = _read_profiles(workdir)[0].read_text(encoding="utf-8")
        assert text.count("\n") == 1

    def test_indent(self, fake_clock, workdir: Path) -> None:
        Profiler(clock=fake_clock, indent=2).write()
        text = _read_profiles(workdir)[0].read_text(encoding="utf-8")
        assert '\n  "traceEvents"' in text

    def test_overwrites_existing_file(self, fake_clock, workdir: Path) -> None:
        profiler = Profiler(clock=fake_clock)
        target = workdir / profiler.file_name(fake_clock.now())
        target.write_text("stale", encoding="utf-8")

        profiler.write()

        assert json.loads(target.read_text(encoding="utf-8"))["traceEvents"] == []

    def test_write_error_propagates(self, fake_clock, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        profiler = Profiler(output_dir=blocker / "profiles", clock=fake_clock)

        with pytest.raises(OSError):
            profiler.write()

    def test_system_clock(self, tmp_path: Path) -> None:
        profiler = Profiler(output_dir=tmp_path)
        with profiler.task(1, "build"):
            pass

        profiler.write()

        data = json.loads(_read_profiles(tmp_path)[0].read_text(encoding="utf-8"))
        _assert_trace_schema(data)
        assert data["traceEvents"][0]["state"] == "succeeded"
