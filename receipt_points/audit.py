"""Audit trail for processed receipts and application log setup."""

import json
import logging
from pathlib import Path

from receipt_points import config
from receipt_points.utils import iso_now

AUDIT_FILENAME = "audit.log"
APP_LOG_FILENAME = "app.log"


def _ensure_log_dir() -> Path:
    log_dir = config.log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def audit_log(
    action: str,
    status: str,
    *,
    receipt_id: str | None = None,
    points: int | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    log_dir = _ensure_log_dir()
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
    }
    if receipt_id:
        entry["receipt_id"] = receipt_id
    if points is not None:
        entry["points"] = points
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(log_dir / AUDIT_FILENAME, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def setup_app_logging():
    """Configure application logging to console and file."""
    log_dir = _ensure_log_dir()
    logger = logging.getLogger(__package__)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(getattr(logging, config.log_level(), logging.INFO))
    ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File
    fh = logging.FileHandler(log_dir / APP_LOG_FILENAME, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
