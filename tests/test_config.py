"""
Unit tests for HarnessConfig.
"""

import pytest

from perf_harness.errors import ConfigurationError
from perf_harness.harness import HarnessConfig


class TestValidate:
    """Count validation."""

    def test_defaults_are_valid(self):
        config = HarnessConfig().validate()
        assert config.measurement_count == 10
        assert config.run_count == 100
        assert config.repeated_count == 10
        assert config.warmup_count == 0

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("run_count", 0),
            ("run_count", -5),
            ("measurement_count", 0),
            ("repeated_count", -1),
            ("warmup_count", -1),
        ],
    )
    def test_out_of_range(self, field_name, value):
        with pytest.raises(ConfigurationError):
            HarnessConfig(**{field_name: value}).validate()

    def test_non_integer_rejected(self):
        with pytest.raises(ConfigurationError):
            HarnessConfig(run_count=2.5).validate()
        with pytest.raises(ConfigurationError):
            HarnessConfig(run_count=True).validate()

    def test_to_dict(self):
        assert HarnessConfig(run_count=7).to_dict()["run_count"] == 7


class TestFromEnv:
    """Reading PERF_HARNESS_* variables."""

    def test_reads_environment(self):
        config = HarnessConfig.from_env({
            "PERF_HARNESS_MEASUREMENT_COUNT": "4",
            "PERF_HARNESS_RUN_COUNT": "50",
            "PERF_HARNESS_REPEATED_COUNT": "3",
            "PERF_HARNESS_WARMUP_COUNT": "1",
        })
        assert config == HarnessConfig(
            measurement_count=4, run_count=50, repeated_count=3, warmup_count=1
        )

    def test_missing_and_blank_use_defaults(self):
        config = HarnessConfig.from_env({"PERF_HARNESS_RUN_COUNT": " "})
        assert config == HarnessConfig()

    def test_overrides_win(self):
        config = HarnessConfig.from_env(
            {"PERF_HARNESS_RUN_COUNT": "50"}, run_count=5, measurement_count=None
        )
        assert config.run_count == 5
        assert config.measurement_count == 10

    def test_bad_integer(self):
        with pytest.raises(ConfigurationError, match="PERF_HARNESS_RUN_COUNT"):
            HarnessConfig.from_env({"PERF_HARNESS_RUN_COUNT": "many"})

    def test_validates(self):
        with pytest.raises(ConfigurationError):
            HarnessConfig.from_env({"PERF_HARNESS_MEASUREMENT_COUNT": "0"})

    def test_uses_os_environ(self, monkeypatch):
        monkeypatch.setenv("PERF_HARNESS_WARMUP_COUNT", "2")
        assert HarnessConfig.from_env().warmup_count == 2
