"""
Deterministic hashing utilities.

A graph fingerprint is the SHA-256 of its canonical JSON form.  Equal
graphs always hash equal, so callers can detect "nothing changed"
without deep comparisons and tag log lines with the graph they saw.
"""

import dataclasses
import hashlib
import json
from enum import Enum
from typing import Any


def _json_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for types not natively supported.

    Raises:
        TypeError: If object type is not supported.
    """
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    if isinstance(obj, bytes):
        return obj.hex()

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonicalize_json(data: dict | list | Any) -> str:
    """
    Convert data to canonical JSON string.

    Keys are sorted, there is no whitespace, and enums serialize as their
    values.
    """
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        default=_json_serializer,
    )


def hash_payload(payload: dict) -> str:
    """Hex-encoded SHA-256 of the canonical JSON of ``payload``."""
    canonical = canonicalize_json(payload)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def fingerprint(value: Any) -> str:
    """SHA-256 fingerprint of a frozen dataclass tree (e.g. a WorkflowGraph)."""
    return hash_payload(dataclasses.asdict(value))
