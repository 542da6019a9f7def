"""Utility modules for the workflow kernel."""

from workflow_kernel.utils.hashing import (
    canonicalize_json,
    fingerprint,
    hash_payload,
)

__all__ = [
    "canonicalize_json",
    "fingerprint",
    "hash_payload",
]
