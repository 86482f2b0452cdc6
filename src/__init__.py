# Just-Tasks Profiler
#
# This package contains the core modules for the just-tasks profiler:
# core (settings, types, trace) and observability (logging).

__all__ = [
    "core",
    "observability",
]
