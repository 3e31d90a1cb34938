"""
Pytest configuration and shared fixtures.

Timing tests run against a fake clock that only moves when a test tells
it to, so durations are exact and independent of host load.
"""

import pytest

from perf_harness.harness import ConsoleReporter, Harness, HarnessConfig


class FakeClock:
    """Monotonic clock advanced by hand, in whole microseconds."""

    def __init__(self):
        self._micros = 0

    def __call__(self) -> float:
        return self._micros / 1_000_000

    def advance(self, micros: int) -> None:
        self._micros += micros

    def work(self, micros: int, result=None):
        """Return a callable that takes `micros` and returns `result`."""
        def fn():
            self.advance(micros)
            return result
        return fn


@pytest.fixture
def clock() -> FakeClock:
    """Return a fresh fake clock."""
    return FakeClock()


@pytest.fixture
def make_harness(clock):
    """Factory for harnesses driven by the fake clock."""

    def factory(
        measurement_count: int = 3,
        run_count: int = 2,
        repeated_count: int = 10,
        warmup_count: int = 0,
        **kwargs,
    ) -> Harness:
        config = HarnessConfig(
            measurement_count=measurement_count,
            run_count=run_count,
            repeated_count=repeated_count,
            warmup_count=warmup_count,
        )
        return Harness(config=config, clock=clock, **kwargs)

    return factory


@pytest.fixture
def quiet_reporter() -> ConsoleReporter:
    """Return a reporter that prints nothing."""
    return ConsoleReporter(verbose=False)
