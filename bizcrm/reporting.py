"""Dashboard and list-page aggregates over already-loaded rows.

Functions accept ORM rows or any objects exposing the same attribute names.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import Any

from bizcrm.core.enums import LeadStatus, PipelineStageId
from bizcrm.utils.numbers import round_half_up


def _safe_int(value: Any) -> int:
    if value is None:
        return 0
    return int(value)


@dataclass(frozen=True)
class InvoiceSummary:
    total_revenue: int
    total_paid: int
    total_pending: int


@dataclass(frozen=True)
class DashboardStats:
    total_leads: int
    total_deals: int
    won_revenue: int
    new_leads: int
    conversion_rate: int


def invoice_balance(invoice: Any) -> int:
    return _safe_int(invoice.total) - _safe_int(invoice.amount_paid)


def invoice_summary(invoices: Iterable[Any]) -> InvoiceSummary:
    rows = list(invoices)
    revenue = sum(_safe_int(row.total) for row in rows)
    paid = sum(_safe_int(row.amount_paid) for row in rows)
    return InvoiceSummary(total_revenue=revenue, total_paid=paid, total_pending=revenue - paid)


def filter_invoices(invoices: Iterable[Any], search: str = "", status: str = "all") -> list[Any]:
    """Case-insensitive match on client name or invoice number, plus status."""
    needle = (search or "").lower()
    matched = []
    for invoice in invoices:
        haystacks = ((invoice.client_name or "").lower(), (invoice.invoice_number or "").lower())
        if needle and not any(needle in text for text in haystacks):
            continue
        if status and status != "all" and invoice.status != status:
            continue
        matched.append(invoice)
    return matched


def dashboard_stats(leads: Sequence[Any], deals: Sequence[Any]) -> DashboardStats:
    won = [deal for deal in deals if deal.stage == PipelineStageId.WON.value]
    total_leads = len(leads)
    conversion = round_half_up(Fraction(len(won) * 100, total_leads)) if total_leads else 0
    return DashboardStats(
        total_leads=total_leads,
        total_deals=len(deals),
        won_revenue=sum(_safe_int(deal.value) for deal in won),
        new_leads=sum(1 for lead in leads if lead.status == LeadStatus.NEW.value),
        conversion_rate=conversion,
    )
