"""Orchestrates validate -> identify -> score for one submitted receipt."""

import logging

from receipt_points.audit import audit_log
from receipt_points.identifier import DuplicateReceipt, identify
from receipt_points.scoring import ScoringError, points_breakdown, score
from receipt_points.validation import InvalidReceipt, validate_id, validate_receipt

logger = logging.getLogger(__name__)


class ReceiptNotFound(LookupError):
    """Raised when no live receipt is cached under an id."""

    def __init__(self, receipt_id: str):
        super().__init__(f"No receipt found for id: {receipt_id}")
        self.receipt_id = receipt_id


def process_receipt(receipt: dict, cache) -> dict:
    """
    Validate, claim a fingerprint id in the cache, then score.
    Returns {"id", "points", "breakdown"}.
    Raises InvalidReceipt, DuplicateReceipt or ScoringError; each is audited before it propagates.
    """
    try:
        validate_receipt(receipt)
        receipt_id = identify(receipt, cache)
        breakdown = points_breakdown(receipt)
    except InvalidReceipt as e:
        logger.info("Receipt rejected: %s", e)
        audit_log("process", "invalid", error=str(e), extra={"field": e.field})
        raise
    except DuplicateReceipt as e:
        audit_log("process", "duplicate", receipt_id=e.receipt_id, error=str(e))
        raise
    except ScoringError as e:
        logger.error("Scoring failed on a validated receipt: %s", e)
        audit_log("process", "error", error=str(e), extra={"field": e.field})
        raise

    points = sum(breakdown.values())
    logger.info("Receipt processed id=%s points=%d", receipt_id[:16], points)
    audit_log("process", "ok", receipt_id=receipt_id, points=points)
    return {"id": receipt_id, "points": points, "breakdown": breakdown}


def lookup_points(receipt_id: str, cache) -> int:
    """
    Points for a previously processed receipt that is still cached.
    Raises InvalidId for a malformed id, ReceiptNotFound if absent or expired.
    """
    validate_id(receipt_id)
    receipt = cache.get(receipt_id)
    if receipt is None:
        raise ReceiptNotFound(receipt_id)
    return score(receipt)
