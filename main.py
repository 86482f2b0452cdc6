#!/usr/bin/env python3
"""Just-Tasks Profiler - Main Entry Point

Runs shell commands as build tasks and records each one with the profiler.

Usage:
    python main.py --output-dir ./profiles "npm run build" "npm test"
"""

import argparse
import subprocess
import sys
from pathlib import Path

from core.settings import SettingsError, get_effective_settings
from core.trace.errors import ProfilerError
from core.trace.profiler import Profiler
from observability.logger import configure_logger, get_logger

logger = get_logger(__name__)

# Default settings path
SETTINGS_PATH = Path(__file__).parent / "config" / "settings.yaml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run commands as build tasks and write a Chrome trace profile."
    )
    parser.add_argument("commands", nargs="+", metavar="COMMAND", help="Shell command to run as a task")
    parser.add_argument("--settings", type=Path, default=None, help="Path to settings.yaml")
    parser.add_argument("--output-dir", default=None, help="Directory for the profile file")
    parser.add_argument("--no-profile", action="store_true", help="Run tasks without writing a profile")
    parser.add_argument("--keep-going", action="store_true", help="Run remaining tasks after a failure")
    return parser


def run_tasks(commands: list[str], profiler: Profiler | None, keep_going: bool = False) -> bool:
    """Run each command as a task.

    Args:
        commands: Shell commands, run in order with task ids from 1.
        profiler: Profiler recording the tasks, or None to skip profiling.
        keep_going: Continue after a failed task.

    Returns:
        True if every task that ran succeeded.
    """
    all_succeeded = True
    for task_id, command in enumerate(commands, start=1):
        logger.info(f"[{task_id}/{len(commands)}] {command}")
        if profiler is not None:
            profiler.start(task_id, command)

        returncode = subprocess.run(command, shell=True).returncode
        success = returncode == 0

        if profiler is not None:
            profiler.stop(task_id, success)
        if not success:
            all_succeeded = False
            logger.error(f"Task {task_id} failed with exit code {returncode}: {command}")
            if not keep_going:
                break
    return all_succeeded


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)
    path = args.settings or SETTINGS_PATH

    overrides: dict = {}
    if args.output_dir:
        overrides["profiler.output_dir"] = args.output_dir
    if args.no_profile:
        overrides["profiler.enabled"] = False

    try:
        settings = get_effective_settings(path, overrides)
    except SettingsError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    configure_logger(level=settings.observability.log_level, log_file=settings.observability.log_file)

    profiler = Profiler.from_settings(settings) if settings.profiler.enabled else None
    try:
        try:
            succeeded = run_tasks(args.commands, profiler, keep_going=args.keep_going)
        finally:
            if profiler is not None:
                profiler.write()
    except ProfilerError as e:
        logger.error(f"Profiler error: {e}")
        return 3
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 3

    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
