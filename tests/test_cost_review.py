from __future__ import annotations

from datetime import date

import pytest

from procanalytics.cost_review import (
    UNKNOWN_VENDOR,
    average_unit_price,
    determine,
    review,
    review_proposal,
)
from procanalytics.errors import DivisionError
from procanalytics.models import Determination, LineItem, Proposal, ProposalStatus, Vendor


def _item(idx: int, quantity: int, unit_price: float) -> LineItem:
    return LineItem(
        id=f"i{idx}",
        description=f"Item {idx}",
        category="General",
        quantity=quantity,
        unit_price=unit_price,
    )


def test_single_outlier_gives_minor_concerns():
    items = [_item(1, 1, 100), _item(2, 1, 100), _item(3, 1, 400)]
    report = review(items, "Acme")

    assert report.vendor_name == "Acme"
    assert report.item_count == 3
    assert report.total_value == 600
    assert report.average_unit_price == pytest.approx(200.0)
    assert [(f.item_id, f.unit_price, f.pct_above_average) for f in report.flagged_items] == [("i3", 400, 100)]
    assert report.determination is Determination.MINOR_CONCERNS


def test_uniform_prices_are_all_fair():
    items = [_item(i, 2, 50) for i in range(5)]
    report = review(items, "Acme")

    assert report.total_value == 500
    assert report.average_unit_price == pytest.approx(50.0)
    assert report.flagged_items == ()
    assert report.determination is Determination.ALL_FAIR


def test_average_is_weighted_by_quantity():
    # total = 10*10 + 1*890 = 990 over 11 units -> average 90
    items = [_item(1, 10, 10), _item(2, 1, 890)]
    assert average_unit_price(items) == pytest.approx(90.0)
    report = review(items, "Acme")
    assert [f.item_id for f in report.flagged_items] == ["i2"]
    assert report.flagged_items[0].pct_above_average == 889


def test_price_exactly_at_threshold_is_not_flagged():
    # average 100, threshold 150
    items = [_item(1, 1, 150), _item(2, 1, 50), _item(3, 2, 100)]
    report = review(items, "Acme")
    assert report.average_unit_price == pytest.approx(100.0)
    assert report.flagged_items == ()


def test_flagged_items_keep_input_order():
    items = [
        _item(1, 10, 1),
        _item(2, 1, 900),
        _item(3, 10, 1),
        _item(4, 1, 500),
    ]
    report = review(items, "Acme")
    assert [f.item_id for f in report.flagged_items] == ["i2", "i4"]


def test_outlier_set_matches_threshold_rule():
    items = [_item(1, 3, 20), _item(2, 1, 95), _item(3, 4, 35), _item(4, 2, 60), _item(5, 1, 10)]
    report = review(items, "Acme")
    avg = report.average_unit_price
    expected = [item.id for item in items if item.unit_price > avg * 1.5]
    assert [f.item_id for f in report.flagged_items] == expected


def test_lowering_a_non_flagged_price_never_flags_it():
    base = [_item(1, 1, 100), _item(2, 1, 100), _item(3, 1, 400)]
    changed = [_item(1, 1, 40), _item(2, 1, 100), _item(3, 1, 400)]
    flagged = {f.item_id for f in review(changed, "Acme").flagged_items}
    assert "i1" not in flagged
    assert {f.item_id for f in review(base, "Acme").flagged_items} == {"i3"}


def test_determination_boundaries():
    assert determine(0) is Determination.ALL_FAIR
    assert determine(1) is Determination.MINOR_CONCERNS
    assert determine(2) is Determination.MINOR_CONCERNS
    assert determine(3) is Determination.MAJOR_CONCERNS


def test_two_and_three_outliers():
    two = [_item(i, 10, 1) for i in range(6)] + [_item(10, 1, 100), _item(11, 1, 100)]
    assert review(two, "Acme").determination is Determination.MINOR_CONCERNS
    three = two + [_item(12, 1, 100)]
    assert review(three, "Acme").determination is Determination.MAJOR_CONCERNS


def test_empty_items_raise_division_error():
    with pytest.raises(DivisionError):
        review([], "Acme")


def test_zero_quantity_raises_division_error():
    items = [_item(1, 0, 100), _item(2, 0, 200)]
    with pytest.raises(DivisionError):
        review(items, "Acme")
    with pytest.raises(ZeroDivisionError):
        average_unit_price(items)


def test_review_is_deterministic():
    items = [_item(1, 3, 20), _item(2, 1, 95), _item(3, 4, 35)]
    assert review(items, "Acme") == review(items, "Acme")


def test_review_proposal_resolves_vendor_name():
    vendor = Vendor("v9", "Globex", "Services", 10, 1000.0, 1, date(2025, 1, 1))
    proposal = Proposal(
        id="p9",
        title="Test",
        vendor_id="v9",
        status=ProposalStatus.DRAFT,
        submission_date=date(2026, 1, 1),
        amount=200.0,
        items=(_item(1, 1, 100), _item(2, 1, 100)),
    )
    assert review_proposal(proposal, [vendor]).vendor_name == "Globex"
    assert review_proposal(proposal, []).vendor_name == UNKNOWN_VENDOR
    assert review_proposal(proposal).vendor_name == UNKNOWN_VENDOR
