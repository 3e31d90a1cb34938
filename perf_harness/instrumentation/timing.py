"""
Timing utilities for micro-benchmarking.

Provides a monotonic timer, a context manager around it, and the
conversions used when reporting durations in microseconds.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

# Monotonic, high resolution; never goes backwards.
Clock = Callable[[], float]
DEFAULT_CLOCK: Clock = time.perf_counter

MICROSECONDS_PER_SECOND = 1_000_000


def to_microseconds(seconds: float) -> float:
    """Convert a duration in seconds to microseconds."""
    return seconds * MICROSECONDS_PER_SECOND


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer", clock: Clock = DEFAULT_CLOCK):
        self.name = name
        self.clock = clock
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = self.clock()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = self.clock()
        self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds."""
        end = self.end_time if not self._running else self.clock()
        return end - self.start_time

    @property
    def elapsed_us(self) -> float:
        """Elapsed time in microseconds."""
        return to_microseconds(self.elapsed)


@contextmanager
def timed(name: str = "operation", clock: Clock = DEFAULT_CLOCK) -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    The timer is stopped even if the body raises.

    Usage:
        with timed("encode") as timer:
            encode(message)
        print(f"Elapsed: {timer.elapsed_us}us")
    """
    timer = Timer(name, clock=clock).start()
    try:
        yield timer
    finally:
        timer.stop()
