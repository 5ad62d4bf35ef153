from __future__ import annotations

from types import SimpleNamespace

from bizcrm.reporting import dashboard_stats, filter_invoices, invoice_balance, invoice_summary


def _invoice(number, client, status, total, paid):
    return SimpleNamespace(invoice_number=number, client_name=client, status=status, total=total, amount_paid=paid)


INVOICES = [
    _invoice("INV-00001", "Acme Traders", "paid", 1180, 1180),
    _invoice("INV-00002", "Globex", "partially_paid", 500, 200),
    _invoice(None, "Initech", "draft", 300, None),
]


def test_invoice_summary_and_balance():
    summary = invoice_summary(INVOICES)
    assert summary.total_revenue == 1980
    assert summary.total_paid == 1380
    assert summary.total_pending == 600
    assert invoice_balance(INVOICES[1]) == 300
    assert invoice_balance(INVOICES[2]) == 300


def test_filter_invoices_matches_name_or_number():
    assert filter_invoices(INVOICES, search="GLOB") == [INVOICES[1]]
    assert filter_invoices(INVOICES, search="inv-00001") == [INVOICES[0]]
    assert filter_invoices(INVOICES, status="draft") == [INVOICES[2]]
    assert filter_invoices(INVOICES, search="acme", status="draft") == []
    assert filter_invoices(INVOICES) == INVOICES


def test_dashboard_stats_rounds_conversion_rate():
    leads = [SimpleNamespace(status=status) for status in ("new", "new", "contacted")]
    deals = [
        SimpleNamespace(stage="won", value=4000),
        SimpleNamespace(stage="won", value=None),
        SimpleNamespace(stage="proposal", value=9000),
    ]

    stats = dashboard_stats(leads, deals)

    assert stats.total_leads == 3
    assert stats.total_deals == 3
    assert stats.won_revenue == 4000
    assert stats.new_leads == 2
    assert stats.conversion_rate == 67


def test_dashboard_stats_without_leads():
    stats = dashboard_stats([], [SimpleNamespace(stage="won", value=10)])
    assert stats.conversion_rate == 0
    assert stats.won_revenue == 10
