"""
Console, log and chart output for measurement results.

The console layout is fixed so that reports can be compared across
implementations; the log is JSON Lines for visualization tools.
"""

import json
import sys
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence, TextIO

LOG_UNIT = "us"


class ConsoleReporter:
    """Formats and prints the fixed-width timing table."""

    ATTEMPT_WIDTH = 3
    VALUE_WIDTH = 9
    NAME_WIDTH = 18

    def __init__(self, stream: Optional[TextIO] = None, verbose: bool = True):
        self.stream = stream
        self.verbose = verbose

    def emit(self, line: str) -> None:
        """Print a line unless the reporter is silenced."""
        if not self.verbose:
            return
        print(line, file=self.stream or sys.stdout)

    def banner(self, run_count: int) -> str:
        return f"Running each check {run_count} times, times in µs"

    def header_rows(self, names: Sequence[str]) -> tuple[str, str]:
        """Two header rows: even-indexed names, then odd-indexed names.

        The second row is shifted by one value column so each name sits
        above its own column.
        """
        indent = " " * self.ATTEMPT_WIDTH
        first = indent + "".join(f"{name:<{self.NAME_WIDTH}}" for name in names[0::2])
        second = (
            indent
            + " " * self.VALUE_WIDTH
            + "".join(f"{name:<{self.NAME_WIDTH}}" for name in names[1::2])
        )
        return first, second

    def attempt_row(self, attempt: int, values: Iterable[float]) -> str:
        cells = "".join(f"{value:{self.VALUE_WIDTH}.3f}" for value in values)
        return f"{attempt:{self.ATTEMPT_WIDTH}d}{cells}"

    def summary(self, relative_stddev: float) -> str:
        return f"Relative stddev = {relative_stddev:.1f}%"

    def warning(self, message: str) -> None:
        """Print a diagnostic outside the report stream."""
        if self.verbose:
            print(f"Warning: {message}", file=sys.stderr)


class LogWriter:
    """Writes per-subtask timing series as JSON Lines.

    The sink is owned by the caller; the writer never closes it. With no
    sink, records are dropped.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def write_to_log(
        self,
        name: str,
        timings: Sequence[float],
        benchmark: Optional[str] = None,
    ) -> None:
        """Write one subtask's per-attempt timings in microseconds."""
        if self.stream is None:
            return

        record = {
            "name": name,
            "unit": LOG_UNIT,
            "timings": [float(t) for t in timings],
        }
        if benchmark is not None:
            record["benchmark"] = benchmark
        self.stream.write(json.dumps(record) + "\n")
        self.stream.flush()


def read_log(stream: TextIO) -> dict[str, list[float]]:
    """Load a JSON Lines timing log into {name: timings}.

    Records tagged with a benchmark are keyed "<benchmark>: <name>".
    Later records for a key replace earlier ones.
    """
    series: dict[str, list[float]] = {}
    for line in stream:
        line = line.strip()
        if not line:
            continue
        record = json.loads(line)
        key = record["name"]
        if record.get("benchmark"):
            key = f"{record['benchmark']}: {key}"
        series[key] = [float(t) for t in record["timings"]]
    return series


class ChartReporter:
    """Generates visual charts of subtask timings using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")

        import matplotlib
        matplotlib.use("Agg")  # Non-interactive backend

    def subtask_timeline(
        self,
        series: Mapping[str, Sequence[float]],
        filename: str = "subtask_timeline.png",
        title: str = "Subtask Timings per Attempt",
    ) -> Optional[Path]:
        """Plot each subtask's per-iteration time against the attempt number."""
        if not series:
            return None

        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(10, 6))
        for name, timings in series.items():
            attempts = range(1, len(timings) + 1)
            ax.plot(attempts, timings, marker="o", label=name)

        ax.set_xlabel("Attempt")
        ax.set_ylabel("Time per iteration (µs)")
        ax.set_title(title)
        ax.legend()

        return self._save(fig, filename)

    def subtask_distribution(
        self,
        series: Mapping[str, Sequence[float]],
        filename: str = "subtask_distribution.png",
        title: str = "Subtask Timing Distribution",
    ) -> Optional[Path]:
        """Box plot of each subtask's per-iteration times."""
        if not series:
            return None

        import matplotlib.pyplot as plt

        names = list(series.keys())
        fig, ax = plt.subplots(figsize=(max(6, len(names) * 1.5), 6))
        ax.boxplot([list(series[name]) for name in names])
        ax.set_xticks(range(1, len(names) + 1))
        ax.set_xticklabels(names, rotation=45, ha="right")
        ax.set_ylabel("Time per iteration (µs)")
        ax.set_title(title)
        fig.tight_layout()

        return self._save(fig, filename)

    def _save(self, fig, filename: str) -> Path:
        import matplotlib.pyplot as plt

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)
        return filepath
