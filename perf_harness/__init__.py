"""
perf-harness - A statistical timing harness for micro-benchmarks.

Repeatedly executes a workload, times whole attempts and named subtasks,
and reduces the samples to mean, standard deviation and relative spread.

Key modules:
- harness: Measurement orchestration, configuration and reporting
- instrumentation: Timing utilities, subtask accounting and statistics
- benchmarks: Sample workloads
"""

__version__ = "0.1.0"

from . import instrumentation
from . import harness

from .errors import ConfigurationError, HarnessError, InvalidInputError
from .harness import Harness, HarnessConfig

__all__ = [
    "instrumentation",
    "harness",
    "ConfigurationError",
    "HarnessError",
    "InvalidInputError",
    "Harness",
    "HarnessConfig",
]
