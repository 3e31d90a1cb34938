"""
Summary statistics over duration series.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..errors import InvalidInputError


@dataclass(frozen=True)
class Statistics:
    """Mean and population standard deviation of a series.

    Values are in the unit of the series they were computed from.
    """

    mean: float
    stddev: float
    count: int
    minimum: float
    maximum: float

    @property
    def relative_stddev(self) -> float:
        """Standard deviation as a percentage of the mean."""
        if self.mean == 0:
            if self.stddev == 0:
                return 0.0
            raise InvalidInputError("relative stddev is undefined for a zero mean")
        return self.stddev / self.mean * 100.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mean": self.mean,
            "stddev": self.stddev,
            "count": self.count,
            "min": self.minimum,
            "max": self.maximum,
            "relative_stddev": self.relative_stddev,
        }


def compute_statistics(series: Sequence[float]) -> Statistics:
    """Compute the mean and population standard deviation of series.

    Raises InvalidInputError for an empty series or one containing
    non-finite values.
    """
    values = np.asarray(list(series), dtype=float)
    if values.size == 0:
        raise InvalidInputError("cannot compute statistics of an empty series")
    if not np.all(np.isfinite(values)):
        raise InvalidInputError("series contains non-finite values")

    minimum = float(np.min(values))
    maximum = float(np.max(values))
    if minimum == maximum:
        # Summation rounding must not turn a constant series into a nonzero spread.
        mean, stddev = minimum, 0.0
    else:
        # np.std defaults to ddof=0, i.e. the population formula
        mean, stddev = float(np.mean(values)), float(np.std(values))

    return Statistics(
        mean=mean,
        stddev=stddev,
        count=int(values.size),
        minimum=minimum,
        maximum=maximum,
    )
