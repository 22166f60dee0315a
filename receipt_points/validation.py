"""Receipt validation: structural schema first, then field formats in a fixed order."""

import json
import re
from datetime import datetime
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"

# ASCII classes: \w and \s mean [0-9A-Za-z_] and plain whitespace, not Unicode letters.
NAME_PATTERN = re.compile(r"[\w\s\-]+", re.ASCII)
MONEY_PATTERN = re.compile(r"\d+\.\d{2}", re.ASCII)
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)
ID_PATTERN = re.compile(r"\S+")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

REQUIRED_FIELDS = ["retailer", "purchaseDate", "purchaseTime", "total"]


class InvalidReceipt(ValueError):
    """Raised when a receipt fails a structural or format rule."""

    def __init__(self, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class InvalidId(ValueError):
    """Raised when a receipt id is empty or contains whitespace."""


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def _schema_path(error: jsonschema.ValidationError) -> str:
    path = ""
    for part in error.absolute_path:
        path += f"[{part}]" if isinstance(part, int) else (f".{part}" if path else part)
    return path or "receipt"


def _is_date(value: str) -> bool:
    if not DATE_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def _is_time(value: str) -> bool:
    if not TIME_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return False
    return True


def validate_receipt(receipt: dict) -> None:
    """
    Validate a receipt. Raises InvalidReceipt on the first failing rule:
    shape, required fields, retailer characters, date, time, total, then each item.
    Missing keys count as empty. No side effects.
    """
    try:
        jsonschema.validate(receipt, _load_schema("receipt"))
    except jsonschema.ValidationError as exc:
        field = _schema_path(exc)
        raise InvalidReceipt(field, f"{field} has an invalid shape: {exc.message}") from exc

    for name in REQUIRED_FIELDS:
        if not receipt.get(name):
            raise InvalidReceipt(name, f"{name} is required")
    items = receipt.get("items") or []
    if not items:
        raise InvalidReceipt("items", "items must contain at least one item")

    if not NAME_PATTERN.fullmatch(receipt["retailer"]):
        raise InvalidReceipt("retailer", "retailer has invalid characters")
    if not _is_date(receipt["purchaseDate"]):
        raise InvalidReceipt("purchaseDate", "purchaseDate must be a date in YYYY-MM-DD format")
    if not _is_time(receipt["purchaseTime"]):
        raise InvalidReceipt("purchaseTime", "purchaseTime must be a 24-hour time in HH:MM format")
    if not MONEY_PATTERN.fullmatch(receipt["total"]):
        raise InvalidReceipt("total", "total must be an amount with exactly two decimal places")

    for i, item in enumerate(items):
        prefix = f"items[{i}]"
        description = item.get("shortDescription", "")
        price = item.get("price", "")
        if not description:
            raise InvalidReceipt(f"{prefix}.shortDescription", f"{prefix}.shortDescription is required")
        if not NAME_PATTERN.fullmatch(description):
            raise InvalidReceipt(
                f"{prefix}.shortDescription", f"{prefix}.shortDescription has invalid characters"
            )
        if not price:
            raise InvalidReceipt(f"{prefix}.price", f"{prefix}.price is required")
        if not MONEY_PATTERN.fullmatch(price):
            raise InvalidReceipt(
                f"{prefix}.price", f"{prefix}.price must be an amount with exactly two decimal places"
            )


def validate_id(receipt_id: str) -> None:
    """Validate a receipt id for lookup. Raises InvalidId if empty or containing whitespace."""
    if not isinstance(receipt_id, str) or not ID_PATTERN.fullmatch(receipt_id):
        raise InvalidId(f"Invalid receipt id: {receipt_id!r}")
