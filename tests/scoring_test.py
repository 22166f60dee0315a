"""Points rules: each rule's contribution checked on its own, not just the final total."""

import pytest

from receipt_points.scoring import ScoringError, points_breakdown, score


def _receipt(**overrides):
    receipt = {
        "retailer": "Target",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "13:01",
        "items": [{"shortDescription": "Gatorade", "price": "2.25"}],
        "total": "35.35",
    }
    receipt.update(overrides)
    return receipt


def _items(n):
    return [{"shortDescription": "Gatorade", "price": "2.25"} for _ in range(n)]


def test_target_breakdown():
    """Target / 35.35 / one 8-char item: only the retailer rule applies."""
    breakdown = points_breakdown(_receipt())
    assert breakdown == {
        "retailer": 6,
        "round_dollar": 0,
        "quarter_multiple": 0,
        "item_pairs": 0,
        "item_descriptions": 0,
        "odd_day": 0,
        "afternoon": 0,
    }
    assert score(_receipt()) == 6


def test_retailer_counts_non_space_characters():
    """Punctuation counts; only spaces are removed."""
    assert points_breakdown(_receipt(retailer="M&M Corner Market"))["retailer"] == 15
    assert points_breakdown(_receipt(retailer="  Best - Buy "))["retailer"] == 8


def test_round_dollar_and_quarter_both_apply():
    breakdown = points_breakdown(_receipt(total="100.00"))
    assert breakdown["round_dollar"] == 50
    assert breakdown["quarter_multiple"] == 25


def test_quarter_multiple_without_round_dollar():
    breakdown = points_breakdown(_receipt(total="9.75"))
    assert breakdown["round_dollar"] == 0
    assert breakdown["quarter_multiple"] == 25


def test_quarter_multiple_is_exact_decimal():
    """Values that are not exact multiples of 0.25 never qualify."""
    for total in ("35.35", "0.10", "12.24", "12.26"):
        assert points_breakdown(_receipt(total=total))["quarter_multiple"] == 0
    assert points_breakdown(_receipt(total="0.00"))["quarter_multiple"] == 25


@pytest.mark.parametrize("count,expected", [(1, 0), (2, 5), (3, 5), (4, 10), (7, 15)])
def test_item_pairs(count, expected):
    assert points_breakdown(_receipt(items=_items(count)))["item_pairs"] == expected


def test_item_description_multiple_of_three_rounds_up():
    """Trimmed length 18 and 24 qualify: ceil(12.25 * 0.2) = 3, ceil(12.00 * 0.2) = 3."""
    items = [
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
    ]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 6


def test_item_description_exact_product_not_rounded_up():
    """15.00 * 0.2 is exactly 3; no extra point."""
    items = [{"shortDescription": "abc", "price": "15.00"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 3


def test_item_description_blank_counts_as_multiple_of_three():
    items = [{"shortDescription": "   ", "price": "4.01"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 1


def test_odd_day():
    assert points_breakdown(_receipt(purchaseDate="2022-01-01"))["odd_day"] == 6
    assert points_breakdown(_receipt(purchaseDate="2022-01-31"))["odd_day"] == 6
    assert points_breakdown(_receipt(purchaseDate="2022-01-02"))["odd_day"] == 0


@pytest.mark.parametrize(
    "purchase_time,expected",
    [("14:00", 0), ("14:01", 10), ("15:00", 10), ("15:59", 10), ("16:00", 0), ("13:59", 0), ("02:30", 0)],
)
def test_afternoon_window_is_exclusive(purchase_time, expected):
    assert points_breakdown(_receipt(purchaseTime=purchase_time))["afternoon"] == expected


def test_all_rules_sum():
    """M&M Corner Market example: 15 + 50 + 25 + 10 + 0 + 0 + 10."""
    receipt = {
        "retailer": "M&M Corner Market",
        "purchaseDate": "2022-03-20",
        "purchaseTime": "14:33",
        "items": [{"shortDescription": "Gatorade", "price": "2.25"} for _ in range(4)],
        "total": "9.00",
    }
    assert score(receipt) == 110


def test_unparseable_price_aborts_scoring():
    """A bad price on a qualifying item fails the whole call; it is not skipped."""
    items = [
        {"shortDescription": "abc", "price": "1.00"},
        {"shortDescription": "xyz", "price": "one dollar"},
    ]
    with pytest.raises(ScoringError) as exc_info:
        score(_receipt(items=items))
    assert exc_info.value.field == "items[1].price"
    assert "failed to parse" in str(exc_info.value)


def test_non_finite_price_rejected():
    with pytest.raises(ScoringError):
        score(_receipt(items=[{"shortDescription": "abc", "price": "NaN"}]))


def test_unparseable_total_raises():
    """A bad total is an error, not a silent zero."""
    with pytest.raises(ScoringError) as exc_info:
        score(_receipt(total="abc"))
    assert exc_info.value.field == "total"


def test_unparseable_date_and_time_raise():
    with pytest.raises(ScoringError) as exc_info:
        score(_receipt(purchaseDate="2022-02-30"))
    assert exc_info.value.field == "purchaseDate"

    with pytest.raises(ScoringError) as exc_info:
        score(_receipt(purchaseTime="25:00"))
    assert exc_info.value.field == "purchaseTime"


def test_score_does_not_mutate_receipt():
    receipt = _receipt(items=_items(3))
    snapshot = {**receipt, "items": [dict(i) for i in receipt["items"]]}
    score(receipt)
    assert receipt == snapshot


def test_long_total_scores_exactly():
    """Totals wider than the default decimal precision still get both total bonuses."""
    total = "1" + "0" * 30 + ".00"
    breakdown = points_breakdown(_receipt(total=total))
    assert breakdown["round_dollar"] == 50
    assert breakdown["quarter_multiple"] == 25

    assert points_breakdown(_receipt(total="1" + "0" * 30 + ".10"))["quarter_multiple"] == 0


def test_long_price_rounds_up_exactly():
    """0.2 * (10**28 + 0.01) = 2 * 10**27 + 0.002, which rounds up to 2 * 10**27 + 1."""
    items = [{"shortDescription": "abc", "price": "1" + "0" * 28 + ".01"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 2 * 10**27 + 1
