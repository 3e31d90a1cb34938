"""
Harness configuration.

Iteration counts are fixed for the lifetime of a Harness. They can be
given directly or read from PERF_HARNESS_* environment variables (the
CLI loads a .env file first).
"""

import os
from dataclasses import dataclass
from typing import Optional

from ..errors import ConfigurationError

ENV_PREFIX = "PERF_HARNESS_"


@dataclass(frozen=True)
class HarnessConfig:
    """Configuration for a harness instance."""

    # Independent attempts; one statistical sample each.
    measurement_count: int = 10
    # Workload repetitions per attempt. Increase this for better precision.
    run_count: int = 100
    # Number of values workloads add to repeated fields. Not read by the harness.
    repeated_count: int = 10
    # Untimed workload invocations before the first attempt.
    warmup_count: int = 0

    def validate(self) -> "HarnessConfig":
        """Raise ConfigurationError unless every count is usable."""
        minimums = {
            "measurement_count": 1,
            "run_count": 1,
            "repeated_count": 0,
            "warmup_count": 0,
        }
        for field_name, minimum in minimums.items():
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{field_name} must be an integer, got {value!r}"
                )
            if value < minimum:
                raise ConfigurationError(
                    f"{field_name} must be >= {minimum}, got {value}"
                )
        return self

    @classmethod
    def from_env(cls, environ: Optional[dict] = None, **overrides) -> "HarnessConfig":
        """Build a config from PERF_HARNESS_* variables.

        Keyword overrides that are not None win over the environment.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field_name in ("measurement_count", "run_count", "repeated_count", "warmup_count"):
            override = overrides.get(field_name)
            if override is not None:
                values[field_name] = override
                continue

            raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            try:
                values[field_name] = int(raw)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_PREFIX}{field_name.upper()} must be an integer, got {raw!r}"
                ) from None

        return cls(**values).validate()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "measurement_count": self.measurement_count,
            "run_count": self.run_count,
            "repeated_count": self.repeated_count,
            "warmup_count": self.warmup_count,
        }
