"""
Benchmark harness for micro-benchmarks.

Provides measurement orchestration, configuration and reporting.
"""

from .config import HarnessConfig

from .runner import (
    BenchmarkSuite,
    Harness,
    MeasurementResult,
    MissingSubtaskPolicy,
    benchmark,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    LogWriter,
    read_log,
)

__all__ = [
    # Config
    "HarnessConfig",
    # Runner
    "BenchmarkSuite",
    "Harness",
    "MeasurementResult",
    "MissingSubtaskPolicy",
    "benchmark",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "LogWriter",
    "read_log",
]
