"""
Tests for the perf-harness command line.
"""

import pytest

from perf_harness.cli import main
from perf_harness.harness import read_log


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PERF_HARNESS_* settings from the host out of the tests."""
    for name in ("MEASUREMENT_COUNT", "RUN_COUNT", "REPEATED_COUNT", "WARMUP_COUNT"):
        monkeypatch.delenv(f"PERF_HARNESS_{name}", raising=False)


def run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestCli:
    def test_list(self, capsys):
        assert run_cli(["--list"]) == 0
        out = capsys.readouterr().out
        assert "json_roundtrip" in out
        assert "pickle_roundtrip" in out

    def test_run_with_log_and_charts(self, tmp_path, capsys):
        log_path = tmp_path / "out" / "timings.jsonl"
        chart_dir = tmp_path / "charts"
        status = run_cli([
            "json_roundtrip",
            "--measurements", "2",
            "--runs", "2",
            "--repeated", "3",
            "--log", str(log_path),
            "--chart-dir", str(chart_dir),
        ])
        assert status == 0

        out = capsys.readouterr().out
        assert "Running each check 2 times, times in µs" in out
        assert "Relative stddev = " in out

        with open(log_path, encoding="utf-8") as stream:
            series = read_log(stream)
        assert series["json_roundtrip: Encode"]
        assert all(len(v) == 2 for v in series.values())
        assert (chart_dir / "subtask_timeline.png").exists()

    def test_env_counts(self, monkeypatch, capsys):
        monkeypatch.setenv("PERF_HARNESS_RUN_COUNT", "3")
        monkeypatch.setenv("PERF_HARNESS_MEASUREMENT_COUNT", "1")
        assert run_cli(["pickle_roundtrip"]) == 0
        assert "Running each check 3 times" in capsys.readouterr().out

    def test_bad_config(self, capsys):
        assert run_cli(["--runs", "0"]) == 1
        assert "Error: run_count must be >= 1" in capsys.readouterr().out

    def test_unknown_benchmark(self, capsys):
        assert run_cli(["nope", "--measurements", "1", "--runs", "1"]) == 1
        assert "Unknown benchmark" in capsys.readouterr().out

    def test_chart_dir_requires_log(self, tmp_path, capsys):
        assert run_cli(["--chart-dir", str(tmp_path)]) == 1
        assert "--chart-dir requires --log" in capsys.readouterr().out
