from __future__ import annotations

from dataclasses import dataclass

import pytest

from bizcrm.core.exceptions import ValidationError
from bizcrm.invoicing import (
    DiscountSpec,
    LineItem,
    TaxSpec,
    add_blank_line_item,
    add_service_line_item,
    compute_totals,
    default_line_items,
    persistable_items,
    recompute_item_amount,
    remove_line_item,
)


@dataclass
class _Service:
    name: str
    rate: int
    is_active: bool = True


def _sample_items() -> list[LineItem]:
    return [
        LineItem(description="Website", quantity=2, rate=100, amount=200),
        LineItem(description="Hosting", quantity=1, rate=50, amount=50),
    ]


@pytest.mark.parametrize("quantity,rate", [(0, 0), (1, 999), (3, 250), (12, 7)])
def test_quantity_and_rate_edits_keep_amount_in_sync(quantity, rate):
    item = LineItem(description="Design", quantity=1, rate=1, amount=1)
    item = recompute_item_amount(item, "quantity", quantity)
    item = recompute_item_amount(item, "rate", rate)
    assert item.amount == quantity * rate


def test_description_edit_leaves_amount_alone():
    item = LineItem(description="Old", quantity=2, rate=100, amount=200)
    updated = recompute_item_amount(item, "description", "New")
    assert updated.description == "New"
    assert updated.amount == 200
    assert item.description == "Old"


def test_non_numeric_input_counts_as_zero():
    item = LineItem(description="Design", quantity=3, rate=100, amount=300)
    updated = recompute_item_amount(item, "rate", "abc")
    assert updated.rate == 0
    assert updated.amount == 0

    updated = recompute_item_amount(item, "quantity", "4 units")
    assert updated.quantity == 4
    assert updated.amount == 400


def test_unknown_field_is_rejected():
    with pytest.raises(ValidationError):
        recompute_item_amount(LineItem(), "amount", 10)


def test_percentage_discount_with_tax():
    totals = compute_totals(_sample_items(), DiscountSpec("percentage", 10), TaxSpec(18))
    assert totals.subtotal == 250
    assert totals.discount_amount == 25
    assert totals.taxable_amount == 225
    assert totals.tax_amount == 41
    assert totals.total == 266


def test_fixed_discount_larger_than_subtotal_goes_negative():
    totals = compute_totals(_sample_items(), DiscountSpec("fixed", 300), TaxSpec(18))
    assert totals.discount_amount == 300
    assert totals.taxable_amount == -50
    assert totals.tax_amount == -9
    assert totals.total == -59


def test_compute_totals_is_idempotent():
    items = _sample_items()
    discount = DiscountSpec("percentage", 15)
    tax = TaxSpec(18)
    assert compute_totals(items, discount, tax) == compute_totals(items, discount, tax)


def test_blank_description_rows_still_count_toward_subtotal():
    items = [*_sample_items(), LineItem(description="", quantity=1, rate=75, amount=75)]
    totals = compute_totals(items, DiscountSpec("percentage", 0), TaxSpec(0))
    assert totals.subtotal == 325
    assert totals.total == 325


def test_halves_round_up():
    # 5% of 50 is 2.5 -> 3; 18% of 25 is 4.5 -> 5.
    items = [LineItem(description="Widget", quantity=1, rate=50, amount=50)]
    totals = compute_totals(items, DiscountSpec("percentage", 50), TaxSpec(18))
    assert totals.discount_amount == 25
    assert totals.tax_amount == 5

    totals = compute_totals(items, DiscountSpec("percentage", 5), TaxSpec(0))
    assert totals.discount_amount == 3


def test_negative_half_rounds_toward_positive_infinity():
    # -25 * 10% = -2.5 -> -2
    items = [LineItem(description="Refund", quantity=1, rate=-25, amount=-25)]
    totals = compute_totals(items, DiscountSpec("fixed", 0), TaxSpec(10))
    assert totals.tax_amount == -2


def test_percentage_above_hundred_is_not_capped():
    totals = compute_totals(_sample_items(), DiscountSpec("percentage", 120), TaxSpec(0))
    assert totals.discount_amount == 300
    assert totals.total == -50


def test_garbage_discount_and_tax_fall_back_to_zero():
    totals = compute_totals(_sample_items(), DiscountSpec("percentage", "ten"), TaxSpec(None))
    assert totals.discount_amount == 0
    assert totals.tax_amount == 0
    assert totals.total == 250


def test_empty_invoice_totals_are_zero():
    totals = compute_totals([], DiscountSpec("percentage", 10), TaxSpec(18))
    assert totals.as_dict() == {
        "subtotal": 0,
        "discount_amount": 0,
        "taxable_amount": 0,
        "tax_amount": 0,
        "total": 0,
    }


def test_add_service_appends_one_unit_row_without_mutating():
    items = _sample_items()
    updated = add_service_line_item(items, _Service(name="SEO Audit", rate=5000))
    assert len(items) == 2
    assert updated[-1] == LineItem(description="SEO Audit", quantity=1, rate=5000, amount=5000)


def test_add_service_does_not_filter_inactive_services():
    updated = add_service_line_item([], _Service(name="Legacy", rate=10, is_active=False))
    assert updated[0].description == "Legacy"


def test_blank_rows_and_removal():
    items = add_blank_line_item(default_line_items())
    assert items == [LineItem(), LineItem()]
    assert LineItem().quantity == 1

    trimmed = remove_line_item(_sample_items(), 0)
    assert [item.description for item in trimmed] == ["Hosting"]
    assert remove_line_item(_sample_items(), 5) == _sample_items()


def test_persistable_items_drop_blank_descriptions():
    items = [*_sample_items(), LineItem()]
    assert [item.description for item in persistable_items(items)] == ["Website", "Hosting"]
