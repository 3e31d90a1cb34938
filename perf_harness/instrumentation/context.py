"""
Per-attempt subtask bookkeeping.

A MeasurementContext accumulates the elapsed time of named subtasks over
one measured attempt. The harness owns one context per attempt and hands
it to the workload through Harness.measure_subtask, so independent
attempts never share accumulators.
"""

from collections import defaultdict
from typing import Callable, Optional, TypeVar

from .timing import DEFAULT_CLOCK, Clock, timed

T = TypeVar("T")


class MeasurementContext:
    """Accumulates subtask durations for a single attempt.

    Durations are summed per name in seconds. The name list tracks the
    order of first use within the current inner iteration only; it is
    cleared by begin_iteration() while the totals keep growing until
    reset().
    """

    def __init__(self, clock: Clock = DEFAULT_CLOCK):
        self.clock = clock
        self.names: list[str] = []
        self.totals: dict[str, float] = {}
        self._depth: dict[str, int] = defaultdict(int)

    def begin_iteration(self) -> None:
        """Start a new inner iteration."""
        self.names.clear()

    def reset(self) -> None:
        """Drop everything recorded so far."""
        self.names.clear()
        self.totals.clear()
        self._depth.clear()

    def total(self, name: str) -> Optional[float]:
        """Accumulated seconds for a subtask, or None if it never ran."""
        return self.totals.get(name)

    def measure_subtask(self, name: str, fn: Callable[[], T]) -> T:
        """Time fn, charge the elapsed time to name and return fn's result.

        Repeated calls with the same name add up. A call nested inside a
        running subtask of the same name is charged to the outer call only.
        """
        if name not in self.names:
            self.names.append(name)

        if self._depth[name]:
            return fn()

        self._depth[name] += 1
        try:
            with timed(name, clock=self.clock) as timer:
                result = fn()
        finally:
            self._depth[name] -= 1

        self.totals[name] = self.totals.get(name, 0.0) + timer.elapsed
        return result
