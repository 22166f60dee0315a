"""Deterministic points engine. Pure code over the receipt, no shared state."""

from datetime import datetime, time
from decimal import ROUND_CEILING, Decimal, InvalidOperation, localcontext

POINTS_ROUND_DOLLAR = 50
POINTS_QUARTER_MULTIPLE = 25
POINTS_PER_ITEM_PAIR = 5
POINTS_ODD_DAY = 6
POINTS_AFTERNOON = 10

QUARTER = Decimal("0.25")
DESCRIPTION_PRICE_FACTOR = Decimal("0.2")
DESCRIPTION_LENGTH_MULTIPLE = 3
AFTERNOON_START = time(14, 0)
AFTERNOON_END = time(16, 0)


class ScoringError(ValueError):
    """Raised when a field that should already be valid fails to parse during scoring."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def _parse_amount(field: str, value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ScoringError(field, f"failed to parse {field}: {value!r}") from exc
    if not amount.is_finite():
        raise ScoringError(field, f"failed to parse {field}: {value!r}")
    return amount


def _parse_clock(field: str, value: str, fmt: str) -> datetime:
    try:
        return datetime.strptime(value, fmt)
    except (ValueError, TypeError) as exc:
        raise ScoringError(field, f"failed to parse {field}: {value!r}") from exc


def _retailer_points(retailer: str) -> int:
    # Only ASCII spaces are dropped; punctuation and tabs still count.
    return len(retailer.replace(" ", ""))


def _round_dollar_points(total: str) -> int:
    return POINTS_ROUND_DOLLAR if total.endswith(".00") else 0


def _exact_precision(amount: Decimal) -> int:
    # Room for every digit of amount plus the short constants it is combined with.
    return len(amount.as_tuple().digits) + 4


def _quarter_multiple_points(total: str) -> int:
    amount = _parse_amount("total", total)
    with localcontext() as ctx:
        ctx.prec = _exact_precision(amount)
        remainder = amount % QUARTER
    return POINTS_QUARTER_MULTIPLE if remainder == 0 else 0


def _item_pair_points(items: list[dict]) -> int:
    return (len(items) // 2) * POINTS_PER_ITEM_PAIR


def _item_description_points(items: list[dict]) -> int:
    """
    For each item whose trimmed description length is a multiple of 3 (zero included),
    add price * 0.2 rounded up. One unparseable price aborts the whole calculation.
    """
    points = 0
    for i, item in enumerate(items):
        description = item.get("shortDescription", "")
        if len(description.strip()) % DESCRIPTION_LENGTH_MULTIPLE != 0:
            continue
        price = _parse_amount(f"items[{i}].price", item.get("price", ""))
        with localcontext() as ctx:
            ctx.prec = _exact_precision(price)
            bonus = (price * DESCRIPTION_PRICE_FACTOR).to_integral_value(rounding=ROUND_CEILING)
        points += int(bonus)
    return points


def _odd_day_points(purchase_date: str) -> int:
    day = _parse_clock("purchaseDate", purchase_date, "%Y-%m-%d").day
    return POINTS_ODD_DAY if day % 2 == 1 else 0


def _afternoon_points(purchase_time: str) -> int:
    t = _parse_clock("purchaseTime", purchase_time, "%H:%M").time()
    return POINTS_AFTERNOON if AFTERNOON_START < t < AFTERNOON_END else 0


def points_breakdown(receipt: dict) -> dict[str, int]:
    """
    Points contributed by each rule for a receipt that already passed validation.
    Raises ScoringError if a price, total, date or time does not parse.
    """
    items = receipt.get("items") or []
    total = receipt.get("total", "")
    return {
        "retailer": _retailer_points(receipt.get("retailer", "")),
        "round_dollar": _round_dollar_points(total),
        "quarter_multiple": _quarter_multiple_points(total),
        "item_pairs": _item_pair_points(items),
        "item_descriptions": _item_description_points(items),
        "odd_day": _odd_day_points(receipt.get("purchaseDate", "")),
        "afternoon": _afternoon_points(receipt.get("purchaseTime", "")),
    }


def score(receipt: dict) -> int:
    """Total points for a validated receipt: sum of every rule's contribution."""
    return sum(points_breakdown(receipt).values())
