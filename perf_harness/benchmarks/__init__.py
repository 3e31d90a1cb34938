"""
Sample benchmark workloads.

Each submodule focuses on a specific workload category.
"""

from ..harness.runner import BenchmarkSuite
from . import serialization
from .serialization import benchmark as _serialization_benchmarks


def default_suite() -> BenchmarkSuite:
    """Suite with every bundled benchmark registered."""
    suite = BenchmarkSuite()
    suite.register_module(_serialization_benchmarks)
    return suite


__all__ = [
    "serialization",
    "default_suite",
]
