"""Utilities for hashing and audit metadata."""

import hashlib
from collections.abc import Iterable
from datetime import datetime, timezone


def hash_parts(parts: Iterable[str]) -> str:
    """SHA256 over the parts fed in order, no separator between them. Deterministic."""
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(part.encode("utf-8"))
    return hasher.hexdigest()


def iso_now() -> str:
    """Current UTC timestamp as ISO string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
