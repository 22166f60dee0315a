"""Runtime settings read from the environment (.env is loaded by entry points)."""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_CACHE_TTL_SECONDS = 300.0
DEFAULT_LOG_LEVEL = "INFO"


def cache_ttl_seconds() -> float:
    """Default time-to-live for duplicate-detection entries."""
    raw = os.environ.get("RECEIPT_CACHE_TTL_SECONDS", "").strip()
    if not raw:
        return DEFAULT_CACHE_TTL_SECONDS
    try:
        ttl = float(raw)
    except ValueError as exc:
        raise ValueError(f"RECEIPT_CACHE_TTL_SECONDS must be a number, got {raw!r}") from exc
    if ttl <= 0:
        raise ValueError(f"RECEIPT_CACHE_TTL_SECONDS must be positive, got {raw!r}")
    return ttl


def log_level() -> str:
    return os.environ.get("RECEIPT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


def log_dir() -> Path:
    raw = os.environ.get("RECEIPT_LOG_DIR", "").strip()
    return Path(raw) if raw else PROJECT_ROOT / "logs"
