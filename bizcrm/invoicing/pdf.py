"""Invoice PDF rendering."""

from __future__ import annotations

import logging
from html import escape
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from bizcrm.core.enums import DiscountType
from bizcrm.invoicing.totals import DiscountSpec, LineItem, TaxSpec, compute_totals
from bizcrm.reporting import invoice_balance

logger = logging.getLogger(__name__)

# Built-in Helvetica has no rupee glyph.
CURRENCY_PREFIX = "Rs. "


def format_amount(amount: int) -> str:
    """Whole-unit amount with Indian digit grouping: 1234567 -> 12,34,567."""
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups) + "," + tail
    return f"{sign}{CURRENCY_PREFIX}{digits}"


def summary_rows(invoice: Any) -> list[tuple[str, int]]:
    """Totals block for a stored invoice, taken from the saved snapshot.

    Subtotal and total are printed as saved. Discount and tax lines are derived
    from the saved subtotal with the stored discount and tax, and left out when
    that derivation no longer lands on the saved total.
    """
    subtotal = invoice.subtotal or 0
    total = invoice.total or 0
    derived = compute_totals(
        [LineItem(amount=subtotal)],
        DiscountSpec(type=invoice.discount_type, value=invoice.discount_value),
        TaxSpec(percentage=invoice.tax_percentage),
    )
    rows = [("Subtotal:", subtotal)]
    if derived.total == total:
        if invoice.discount_type == DiscountType.PERCENTAGE.value:
            discount_label = f"Discount ({invoice.discount_value}%):"
        else:
            discount_label = "Discount:"
        rows.append((discount_label, -derived.discount_amount))
        rows.append((f"Tax ({invoice.tax_percentage}%):", derived.tax_amount))
    rows.append(("Total:", total))
    return rows


def render_invoice_pdf(invoice: Any, items: list[LineItem], business_name: str = "bizcrm") -> bytes:
    """Render a stored invoice to PDF bytes.

    ``items`` are the persisted rows; amounts in the totals block and the
    amount due come from the invoice's saved snapshot.
    """
    totals = summary_rows(invoice)

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=inch,
        leftMargin=inch,
        topMargin=inch,
        bottomMargin=inch,
        title=invoice.invoice_number or "Invoice",
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "InvoiceTitle",
        parent=styles["Heading1"],
        fontSize=22,
        textColor=colors.HexColor("#2C3E50"),
        spaceAfter=24,
        alignment=TA_CENTER,
    )

    elements = [
        Paragraph(escape(business_name), title_style),
        Paragraph(f"INVOICE {invoice.invoice_number or ''}", styles["Heading2"]),
        Spacer(1, 0.2 * inch),
    ]

    bill_to = Table(
        [
            ["Bill To:", "", "Status:", invoice.status],
            [invoice.client_name, "", "Due Date:", invoice.due_date.isoformat() if invoice.due_date else "-"],
            [invoice.client_email or "", "", "Amount Due:", format_amount(invoice_balance(invoice))],
            [invoice.client_phone or "", "", "", ""],
        ],
        colWidths=[2.5 * inch, 0.3 * inch, 1.3 * inch, 1.9 * inch],
    )
    bill_to.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (0, 0), "Helvetica-Bold"),
                ("FONTNAME", (2, 0), (2, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    elements.extend([bill_to, Spacer(1, 0.3 * inch)])

    rows = [["Description", "Qty", "Rate", "Amount"]]
    rows.extend(
        [item.description, str(item.quantity), format_amount(item.rate), format_amount(item.amount)]
        for item in items
    )
    rows.extend(["", "", label, format_amount(amount)] for label, amount in totals)
    items_table = Table(rows, colWidths=[3.0 * inch, 0.6 * inch, 1.2 * inch, 1.2 * inch])
    items_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#3498DB")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("GRID", (0, 0), (-1, -1 - len(totals)), 0.5, colors.grey),
                ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                ("FONTNAME", (2, -len(totals)), (-1, -1), "Helvetica-Bold"),
                ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
            ]
        )
    )
    elements.append(items_table)

    if invoice.notes:
        elements.extend(
            [
                Spacer(1, 0.3 * inch),
                Paragraph("<b>Notes:</b>", styles["Heading3"]),
                Paragraph(escape(invoice.notes), styles["Normal"]),
            ]
        )

    doc.build(elements)
    logger.info(
        "invoice.pdf.rendered number=%s",
        invoice.invoice_number,
        extra={"event": "invoice.pdf.rendered"},
    )
    return buffer.getvalue()
