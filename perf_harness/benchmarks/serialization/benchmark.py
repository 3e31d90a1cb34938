"""
Serialization benchmarks - encode/decode cost of a populated message.

Each benchmark builds a message with scalar and repeated fields, then
times populating, encoding, decoding and comparing it as separate
subtasks. Repeated fields hold harness.repeated_count values.
"""

import json
import pickle
from typing import Any, Callable

from ...harness.runner import Harness, MeasurementResult, benchmark


def populate_message(repeated_count: int) -> dict[str, Any]:
    """Build a message with every field type set."""
    return {
        "optional_int32": 101,
        "optional_int64": 102,
        "optional_double": 112.5,
        "optional_bool": True,
        "optional_string": "the quick brown fox",
        "optional_bytes_hex": "deadbeef",
        "nested": {"bb": 118, "label": "nested"},
        "repeated_int32": [201 + i for i in range(repeated_count)],
        "repeated_double": [212.5 * i for i in range(repeated_count)],
        "repeated_string": [f"value-{i}" for i in range(repeated_count)],
        "repeated_nested": [{"bb": i, "label": str(i)} for i in range(repeated_count)],
    }


def _roundtrip(
    harness: Harness,
    encode: Callable[[dict], Any],
    decode: Callable[[Any], dict],
) -> MeasurementResult:
    def run() -> None:
        message = harness.measure_subtask(
            "Populate fields", lambda: populate_message(harness.repeated_count)
        )
        data = harness.measure_subtask("Encode", lambda: encode(message))
        decoded = harness.measure_subtask("Decode", lambda: decode(data))
        harness.measure_subtask("Equality", lambda: message == decoded)

    return harness.measure(run)


@benchmark("json_roundtrip")
def json_roundtrip(harness: Harness) -> MeasurementResult:
    """JSON text encode/decode of a populated message."""
    return _roundtrip(harness, json.dumps, json.loads)


@benchmark("pickle_roundtrip")
def pickle_roundtrip(harness: Harness) -> MeasurementResult:
    """Pickle encode/decode of a populated message."""
    return _roundtrip(
        harness,
        lambda message: pickle.dumps(message, protocol=pickle.HIGHEST_PROTOCOL),
        pickle.loads,
    )
