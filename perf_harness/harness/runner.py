"""
Measurement orchestrator for micro-benchmarks.

Runs a workload under controlled repetition, tabulates named subtask
timings per attempt and summarizes the spread of the whole-attempt
timings.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import ModuleType
from typing import Callable, Optional, TextIO, TypeVar

from ..errors import HarnessError
from ..instrumentation.context import MeasurementContext
from ..instrumentation.statistics import Statistics, compute_statistics
from ..instrumentation.timing import DEFAULT_CLOCK, Clock, to_microseconds
from .config import HarnessConfig
from .reporter import ConsoleReporter, LogWriter

T = TypeVar("T")


class MissingSubtaskPolicy(Enum):
    """What to record for a tabulated subtask that did not run in an attempt."""

    # Repeat the previous attempt's sample (0.0 if there is none).
    CARRY_FORWARD = "carry_forward"
    ZERO = "zero"


@dataclass
class MeasurementResult:
    """Everything collected by one call to Harness.measure."""

    config: HarnessConfig
    subtask_names: list[str]
    # Whole-attempt durations in seconds, not divided by run_count.
    timings: list[float]
    # Per-iteration microseconds, one value per attempt.
    subtask_timings: dict[str, list[float]]
    statistics: Statistics
    inconsistent_attempts: list[int] = field(default_factory=list)

    @property
    def relative_stddev(self) -> float:
        return self.statistics.relative_stddev

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "config": self.config.to_dict(),
            "subtask_names": list(self.subtask_names),
            "timings_us": [to_microseconds(t) for t in self.timings],
            "subtask_timings_us": {k: list(v) for k, v in self.subtask_timings.items()},
            "statistics_us": {
                "mean": to_microseconds(self.statistics.mean),
                "stddev": to_microseconds(self.statistics.stddev),
            },
            "relative_stddev": self.relative_stddev,
            "inconsistent_attempts": list(self.inconsistent_attempts),
        }


class Harness:
    """Repeatedly executes workloads and reports their timings.

    Console output follows a fixed layout (see ConsoleReporter); the
    per-subtask series are also written to results_stream, when given,
    for visualization.

    The subtask names recorded during the last inner iteration of the
    first attempt become the canonical, ordered list used for the table
    and the log. Workloads are expected to run the same subtasks every
    time; later attempts that differ are reported with a warning and
    listed in MeasurementResult.inconsistent_attempts.
    """

    def __init__(
        self,
        results_stream: Optional[TextIO] = None,
        config: Optional[HarnessConfig] = None,
        reporter: Optional[ConsoleReporter] = None,
        clock: Clock = DEFAULT_CLOCK,
        missing_subtask_policy: MissingSubtaskPolicy = MissingSubtaskPolicy.CARRY_FORWARD,
        verbose: bool = True,
    ):
        self.config = (config or HarnessConfig()).validate()
        self.log_writer = LogWriter(results_stream)
        self.reporter = reporter or ConsoleReporter(verbose=verbose)
        self.clock = clock
        self.missing_subtask_policy = missing_subtask_policy
        # Tags log records; set by BenchmarkSuite while a benchmark runs.
        self.label: Optional[str] = None
        self._context: Optional[MeasurementContext] = None

    @property
    def measurement_count(self) -> int:
        return self.config.measurement_count

    @property
    def run_count(self) -> int:
        return self.config.run_count

    @property
    def repeated_count(self) -> int:
        return self.config.repeated_count

    @property
    def current_context(self) -> Optional[MeasurementContext]:
        """The context of the attempt in progress, if any."""
        return self._context

    def measure(self, workload: Callable[[], object]) -> MeasurementResult:
        """Time workload over measurement_count attempts of run_count calls.

        Exceptions raised by the workload propagate unchanged and abort
        the run before anything is logged or summarized.
        """
        config = self.config.validate()
        if self._context is not None:
            raise HarnessError("measure() cannot be called from inside a workload")

        run_count = config.run_count
        report = self.reporter
        report.emit(report.banner(run_count))

        timings: list[float] = []
        subtask_names: list[str] = []
        subtask_timings: dict[str, list[float]] = {}
        inconsistent: list[int] = []

        try:
            # Warm-up samples are discarded with their context.
            self._context = MeasurementContext(clock=self.clock)
            for _ in range(config.warmup_count):
                self._context.begin_iteration()
                workload()

            for attempt in range(1, config.measurement_count + 1):
                context = MeasurementContext(clock=self.clock)
                self._context = context

                start = self.clock()
                for _ in range(run_count):
                    context.begin_iteration()
                    workload()
                end = self.clock()
                timings.append(end - start)

                if attempt == 1:
                    subtask_names = list(context.names)
                    subtask_timings = {name: [] for name in subtask_names}
                    for row in report.header_rows(subtask_names):
                        report.emit(row)
                elif set(context.names) != set(subtask_names):
                    inconsistent.append(attempt)
                    report.warning(
                        f"attempt {attempt} ran subtasks {context.names}, "
                        f"expected {subtask_names}"
                    )

                values = []
                for name in subtask_names:
                    total = context.total(name)
                    if total is None:
                        value = self._missing_sample(subtask_timings[name])
                    else:
                        value = to_microseconds(total) / run_count
                    subtask_timings[name].append(value)
                    values.append(value)
                report.emit(report.attempt_row(attempt, values))
        finally:
            self._context = None

        for name in subtask_names:
            self.log_writer.write_to_log(name, subtask_timings[name], benchmark=self.label)

        statistics = compute_statistics(timings)
        report.emit(report.summary(statistics.relative_stddev))

        return MeasurementResult(
            config=config,
            subtask_names=subtask_names,
            timings=timings,
            subtask_timings=subtask_timings,
            statistics=statistics,
            inconsistent_attempts=inconsistent,
        )

    def measure_subtask(self, name: str, fn: Callable[[], T]) -> T:
        """Time fn as the subtask name and return its result unchanged.

        Only valid while a workload passed to measure() is running.
        """
        if self._context is None:
            raise HarnessError(
                f"measure_subtask({name!r}) called outside of measure()"
            )
        return self._context.measure_subtask(name, fn)

    def _missing_sample(self, series: list[float]) -> float:
        if self.missing_subtask_policy is MissingSubtaskPolicy.CARRY_FORWARD and series:
            return series[-1]
        return 0.0


# Type alias for benchmark functions
BenchmarkFn = Callable[[Harness], Optional[MeasurementResult]]


def benchmark(name: Optional[str] = None, description: str = ""):
    """Decorator for marking functions as benchmarks.

    Usage:
        @benchmark("json_roundtrip")
        def json_roundtrip(harness: Harness) -> MeasurementResult:
            return harness.measure(...)
    """
    def decorator(func: Callable) -> Callable:
        doc = (func.__doc__ or "").strip()
        func._benchmark_config = {
            "name": name or func.__name__,
            "description": description or (doc.splitlines()[0] if doc else ""),
        }
        return func
    return decorator


class BenchmarkSuite:
    """Registry of named benchmarks run against a shared harness."""

    def __init__(self):
        self._benchmarks: dict[str, BenchmarkFn] = {}
        self._descriptions: dict[str, str] = {}

    def register(self, name: str, fn: BenchmarkFn, description: str = "") -> None:
        """Register a benchmark function."""
        if name in self._benchmarks:
            raise HarnessError(f"Benchmark already registered: {name}")
        self._benchmarks[name] = fn
        self._descriptions[name] = description

    def register_module(self, module: ModuleType) -> list[str]:
        """Register every @benchmark function defined in module."""
        registered = []
        for attr in vars(module).values():
            config = getattr(attr, "_benchmark_config", None)
            if callable(attr) and config is not None:
                self.register(config["name"], attr, config["description"])
                registered.append(config["name"])
        return registered

    def list_benchmarks(self) -> list[str]:
        """List registered benchmark names."""
        return list(self._benchmarks.keys())

    def describe(self, name: str) -> str:
        return self._descriptions.get(name, "")

    def run(self, name: str, harness: Harness) -> Optional[MeasurementResult]:
        """Run a single registered benchmark."""
        if name not in self._benchmarks:
            raise HarnessError(f"Unknown benchmark: {name}")
        harness.reporter.emit(f"\n{name}")
        previous_label = harness.label
        harness.label = name
        try:
            return self._benchmarks[name](harness)
        finally:
            harness.label = previous_label

    def run_all(
        self,
        harness: Harness,
        names: Optional[list[str]] = None,
    ) -> dict[str, Optional[MeasurementResult]]:
        """Run the named benchmarks, or all of them, in registration order."""
        selected = names or self.list_benchmarks()
        unknown = [n for n in selected if n not in self._benchmarks]
        if unknown:
            raise HarnessError(f"Unknown benchmark(s): {', '.join(unknown)}")

        results = {}
        for name in selected:
            results[name] = self.run(name, harness)
        return results
