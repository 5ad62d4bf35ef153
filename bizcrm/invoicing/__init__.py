"""Invoice arithmetic: line items, discounts, tax and totals."""

from bizcrm.invoicing.totals import (
    DiscountSpec,
    InvoiceTotals,
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
from bizcrm.utils.numbers import coerce_int

__all__ = [
    "DiscountSpec",
    "InvoiceTotals",
    "LineItem",
    "TaxSpec",
    "add_blank_line_item",
    "add_service_line_item",
    "coerce_int",
    "compute_totals",
    "default_line_items",
    "persistable_items",
    "recompute_item_amount",
    "remove_line_item",
]
