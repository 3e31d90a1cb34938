"""
perf-harness - Command-line entry point for running benchmarks.

Usage:
    perf-harness [benchmark ...] [options]

Counts default to the PERF_HARNESS_* environment variables (a .env file
in the working directory is loaded first), then to built-in defaults.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import HarnessError
from .harness.config import HarnessConfig
from .harness.reporter import ChartReporter, read_log
from .harness.runner import Harness


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perf-harness",
        description="perf-harness - Statistical timing of micro-benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    perf-harness --list
    perf-harness json_roundtrip --runs 1000
    perf-harness --measurements 20 --log results/timings.jsonl
    perf-harness --log results/timings.jsonl --chart-dir results/charts
        """,
    )

    parser.add_argument(
        "benchmarks",
        nargs="*",
        help="Benchmarks to run (default: all)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available benchmarks and exit",
    )
    parser.add_argument(
        "--measurements",
        type=int,
        default=None,
        help="Number of measured attempts (default: 10)",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=None,
        help="Workload repetitions per attempt (default: 100)",
    )
    parser.add_argument(
        "--repeated",
        type=int,
        default=None,
        help="Values added to repeated fields by workloads (default: 10)",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=None,
        help="Untimed runs before the first attempt (default: 0)",
    )
    parser.add_argument(
        "--log",
        type=Path,
        default=None,
        help="Write per-subtask timings as JSON Lines to this file",
    )
    parser.add_argument(
        "--chart-dir",
        type=Path,
        default=None,
        help="Render charts of the logged timings into this directory (requires --log)",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    """Run the selected benchmarks; returns the process exit status."""
    from .benchmarks import default_suite

    suite = default_suite()

    if args.list:
        for name in suite.list_benchmarks():
            print(f"  {name:<20} {suite.describe(name)}")
        return 0

    if args.chart_dir and not args.log:
        raise HarnessError("--chart-dir requires --log")

    config = HarnessConfig.from_env(
        measurement_count=args.measurements,
        run_count=args.runs,
        repeated_count=args.repeated,
        warmup_count=args.warmup,
    )

    if args.log:
        args.log.parent.mkdir(parents=True, exist_ok=True)
        with open(args.log, "w", encoding="utf-8") as log_stream:
            harness = Harness(results_stream=log_stream, config=config)
            suite.run_all(harness, args.benchmarks or None)
    else:
        harness = Harness(config=config)
        suite.run_all(harness, args.benchmarks or None)

    if args.chart_dir:
        with open(args.log, encoding="utf-8") as log_stream:
            series = read_log(log_stream)
        charts = ChartReporter(args.chart_dir)
        for path in (charts.subtask_timeline(series), charts.subtask_distribution(series)):
            if path:
                print(f"Chart written to {path}")

    return 0


def main(argv: Optional[list[str]] = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        status = run(args)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except HarnessError as e:
        print(f"\nError: {e}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
