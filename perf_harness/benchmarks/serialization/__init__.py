"""
Serialization benchmarks - JSON and pickle round trips.
"""

from .benchmark import (
    json_roundtrip,
    pickle_roundtrip,
    populate_message,
)

__all__ = [
    "json_roundtrip",
    "pickle_roundtrip",
    "populate_message",
]
