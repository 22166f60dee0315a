"""Content fingerprints for receipts and duplicate-submission detection."""

import logging

from receipt_points.utils import hash_parts

logger = logging.getLogger(__name__)


class DuplicateReceipt(Exception):
    """Raised when a receipt's fingerprint is already held in the cache."""

    def __init__(self, receipt_id: str):
        super().__init__(f"Receipt already submitted: {receipt_id}")
        self.receipt_id = receipt_id


def _fingerprint_parts(receipt: dict):
    yield receipt.get("retailer", "")
    yield receipt.get("purchaseDate", "")
    yield receipt.get("purchaseTime", "")
    # sorted() is stable and leaves the caller's list untouched
    items = sorted(receipt.get("items") or [], key=lambda item: item.get("shortDescription", ""))
    for item in items:
        yield item.get("shortDescription", "") + item.get("price", "")
    yield receipt.get("total", "")


def receipt_fingerprint(receipt: dict) -> str:
    """
    64-char lowercase sha256 hex of retailer, date, time, each item's description+price
    (items ordered by description) and total, concatenated with no separators.
    Item order on the receipt does not change the result.
    """
    return hash_parts(_fingerprint_parts(receipt))


def identify(receipt: dict, cache) -> str:
    """
    Fingerprint the receipt and claim the fingerprint in the cache.
    cache needs get(key) and set(key, value); the entry gets the cache's default TTL.
    A cache that also offers add(key, value) -> bool (ExpiringCache does) gets the
    check and the insert as one atomic step, so concurrent submissions of one receipt
    cannot both succeed.
    Raises DuplicateReceipt(receipt_id) if the fingerprint is already cached.
    Not idempotent: the second call with the same receipt fails until the entry expires.
    """
    receipt_id = receipt_fingerprint(receipt)
    add = getattr(cache, "add", None)
    if add is not None:
        claimed = add(receipt_id, receipt)
    else:
        claimed = cache.get(receipt_id) is None
        if claimed:
            cache.set(receipt_id, receipt)
    if not claimed:
        logger.info("Duplicate receipt rejected id=%s", receipt_id[:16])
        raise DuplicateReceipt(receipt_id)
    logger.debug("Receipt registered id=%s", receipt_id[:16])
    return receipt_id
