"""
Exception types raised by the timing harness.
"""


class HarnessError(Exception):
    """Base class for harness failures."""


class ConfigurationError(HarnessError, ValueError):
    """Invalid iteration counts or environment settings.

    Raised before the measurement loop starts; a run is never attempted
    with a bad configuration.
    """


class InvalidInputError(HarnessError, ValueError):
    """Statistics requested over data they are undefined for."""
