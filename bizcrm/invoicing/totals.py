"""Invoice line items and totals.

Every function here is pure: inputs are never mutated and results depend only
on the arguments. Amounts are whole currency units (no paise/cents).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from bizcrm.core.enums import DiscountType
from bizcrm.core.exceptions import ValidationError
from bizcrm.utils.numbers import coerce_int, percent_of

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("description", "quantity", "rate")


@dataclass(frozen=True)
class LineItem:
    description: str = ""
    quantity: int = 1
    rate: int = 0
    amount: int = 0

    @classmethod
    def build(cls, description: str, quantity: Any, rate: Any) -> "LineItem":
        qty = coerce_int(quantity)
        unit_rate = coerce_int(rate)
        return cls(description=description or "", quantity=qty, rate=unit_rate, amount=qty * unit_rate)


@dataclass(frozen=True)
class DiscountSpec:
    type: str = DiscountType.PERCENTAGE.value
    value: Any = 0

    @property
    def is_percentage(self) -> bool:
        return self.type == DiscountType.PERCENTAGE.value


@dataclass(frozen=True)
class TaxSpec:
    percentage: Any = 18


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: int
    discount_amount: int
    taxable_amount: int
    tax_amount: int
    total: int

    def as_dict(self) -> dict[str, int]:
        return {
            "subtotal": self.subtotal,
            "discount_amount": self.discount_amount,
            "taxable_amount": self.taxable_amount,
            "tax_amount": self.tax_amount,
            "total": self.total,
        }


def recompute_item_amount(item: LineItem, changed_field: str, new_value: Any) -> LineItem:
    """Apply one field edit to a line item and keep ``amount`` in sync."""
    if changed_field not in EDITABLE_FIELDS:
        raise ValidationError(f"Line item field is not editable: {changed_field}")

    if changed_field == "description":
        return replace(item, description="" if new_value is None else str(new_value))

    updated = replace(item, **{changed_field: coerce_int(new_value)})
    return replace(updated, amount=updated.quantity * updated.rate)


def compute_totals(items: Sequence[LineItem], discount: DiscountSpec, tax: TaxSpec) -> InvoiceTotals:
    """Derive subtotal, discount, tax and total.

    Blank-description rows still count toward the subtotal. A fixed discount is
    not clamped, so the taxable amount and total can go negative.
    """
    subtotal = sum(item.amount for item in items)
    discount_value = coerce_int(discount.value)
    if discount.is_percentage:
        discount_amount = percent_of(subtotal, discount_value)
    else:
        discount_amount = discount_value

    taxable_amount = subtotal - discount_amount
    tax_amount = percent_of(taxable_amount, coerce_int(tax.percentage))
    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        total=taxable_amount + tax_amount,
    )


def add_service_line_item(items: Sequence[LineItem], service: Any) -> list[LineItem]:
    """Append a one-unit row priced from a catalogue service.

    ``service`` is anything with ``name`` and ``rate`` attributes. Filtering out
    inactive services is left to the caller.
    """
    rate = coerce_int(service.rate)
    return [*items, LineItem(description=service.name, quantity=1, rate=rate, amount=rate)]


def add_blank_line_item(items: Sequence[LineItem]) -> list[LineItem]:
    return [*items, LineItem()]


def remove_line_item(items: Sequence[LineItem], index: int) -> list[LineItem]:
    if not 0 <= index < len(items):
        logger.debug("invoice.line_item.remove_out_of_range index=%s size=%s", index, len(items))
        return list(items)
    return [item for position, item in enumerate(items) if position != index]


def persistable_items(items: Sequence[LineItem]) -> list[LineItem]:
    """Rows worth saving: anything with a description."""
    return [item for item in items if item.description]


def default_line_items() -> list[LineItem]:
    """A new invoice starts with one blank row."""
    return [LineItem()]
