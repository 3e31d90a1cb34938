"""
Instrumentation module for micro-benchmarking.

Provides timing utilities, per-attempt subtask accounting and summary
statistics.
"""

from .timing import (
    Clock,
    DEFAULT_CLOCK,
    Timer,
    timed,
    to_microseconds,
)

from .context import MeasurementContext

from .statistics import (
    Statistics,
    compute_statistics,
)

__all__ = [
    # Timing
    "Clock",
    "DEFAULT_CLOCK",
    "Timer",
    "timed",
    "to_microseconds",
    # Subtasks
    "MeasurementContext",
    # Statistics
    "Statistics",
    "compute_statistics",
]
