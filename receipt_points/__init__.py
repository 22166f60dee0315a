"""Receipt points - validation, deterministic scoring and duplicate detection for purchase receipts."""

from receipt_points.cache import ExpiringCache
from receipt_points.identifier import DuplicateReceipt, identify, receipt_fingerprint
from receipt_points.processor import ReceiptNotFound, lookup_points, process_receipt
from receipt_points.scoring import ScoringError, points_breakdown, score
from receipt_points.validation import InvalidId, InvalidReceipt, validate_id, validate_receipt

__all__ = [
    "DuplicateReceipt",
    "ExpiringCache",
    "InvalidId",
    "InvalidReceipt",
    "ReceiptNotFound",
    "ScoringError",
    "identify",
    "lookup_points",
    "points_breakdown",
    "process_receipt",
    "receipt_fingerprint",
    "score",
    "validate_id",
    "validate_receipt",
]
