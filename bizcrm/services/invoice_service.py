"""Invoice service: totals snapshots, line items, payments and the service catalogue."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from bizcrm.core.config import get_config
from bizcrm.core.enums import InvoiceStatus, PaymentMethod
from bizcrm.core.exceptions import NotFoundError, ValidationError
from bizcrm.invoicing import (
    DiscountSpec,
    InvoiceTotals,
    LineItem,
    TaxSpec,
    coerce_int,
    compute_totals,
    persistable_items,
)
from bizcrm.models import Invoice, InvoiceItem, Payment, Service
from bizcrm.reporting import filter_invoices, invoice_balance
from bizcrm.services.base_service import BaseService

logger = logging.getLogger(__name__)

INVOICE_FIELDS = {
    "client_name",
    "client_email",
    "client_phone",
    "client_address",
    "lead_id",
    "status",
    "due_date",
    "notes",
}


def line_items_of(invoice: Invoice) -> list[LineItem]:
    return [
        LineItem(description=item.description, quantity=item.quantity, rate=item.rate, amount=item.amount)
        for item in invoice.items
    ]


class InvoiceService(BaseService):
    """Service for invoice CRUD; totals always come from the invoicing engine."""

    def _apply_totals(
        self,
        invoice: Invoice,
        items: Sequence[LineItem],
        discount: DiscountSpec,
        tax: TaxSpec,
    ) -> InvoiceTotals:
        totals = compute_totals(items, discount, tax)
        invoice.discount_type = discount.type
        invoice.discount_value = coerce_int(discount.value)
        invoice.tax_percentage = coerce_int(tax.percentage)
        invoice.subtotal = totals.subtotal
        invoice.total = totals.total
        invoice.items = [
            InvoiceItem(
                position=position,
                description=item.description,
                quantity=item.quantity,
                rate=item.rate,
                amount=item.amount,
            )
            for position, item in enumerate(persistable_items(items))
        ]
        return totals

    def create_invoice(
        self,
        client_name: str,
        items: Sequence[LineItem],
        discount: DiscountSpec | None = None,
        tax: TaxSpec | None = None,
        **fields: Any,
    ) -> Invoice:
        unknown = set(fields) - INVOICE_FIELDS
        if unknown:
            raise ValidationError(f"unknown invoice fields: {sorted(unknown)}")

        cfg = get_config()
        invoice = Invoice(client_name=client_name, status=InvoiceStatus.DRAFT.value, amount_paid=0)
        for name, value in fields.items():
            setattr(invoice, name, value)
        self._apply_totals(
            invoice,
            items,
            discount or DiscountSpec(type=cfg.DEFAULT_DISCOUNT_TYPE, value=0),
            tax or TaxSpec(percentage=cfg.DEFAULT_TAX_PERCENTAGE),
        )
        self.db.add(invoice)
        self.db.flush()
        invoice.invoice_number = f"{cfg.INVOICE_NUMBER_PREFIX}-{invoice.id:05d}"
        self.commit()
        self.db.refresh(invoice)
        logger.info(
            "invoice.created number=%s total=%s",
            invoice.invoice_number,
            invoice.total,
            extra={"event": "invoice.created"},
        )
        return invoice

    def get_invoice(self, invoice_id: int) -> Invoice | None:
        return self.db.query(Invoice).filter(Invoice.id == invoice_id).first()

    def require_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError("invoice", invoice_id)
        return invoice

    def list_invoices(self, search: str = "", status: str = "all") -> list[Invoice]:
        rows = self.db.query(Invoice).order_by(Invoice.id.desc()).all()
        return filter_invoices(rows, search=search, status=status)

    def update_invoice(
        self,
        invoice_id: int,
        items: Sequence[LineItem] | None = None,
        discount: DiscountSpec | None = None,
        tax: TaxSpec | None = None,
        **fields: Any,
    ) -> Invoice:
        unknown = set(fields) - INVOICE_FIELDS
        if unknown:
            raise ValidationError(f"unknown invoice fields: {sorted(unknown)}")

        invoice = self.require_invoice(invoice_id)
        for name, value in fields.items():
            setattr(invoice, name, value)

        if items is not None or discount is not None or tax is not None:
            self._apply_totals(
                invoice,
                line_items_of(invoice) if items is None else items,
                discount or DiscountSpec(type=invoice.discount_type, value=invoice.discount_value),
                tax or TaxSpec(percentage=invoice.tax_percentage),
            )
        self.commit()
        self.db.refresh(invoice)
        return invoice

    def record_payment(
        self,
        invoice_id: int,
        amount: int,
        method: str = PaymentMethod.BANK_TRANSFER.value,
        reference: str | None = None,
        notes: str | None = None,
        paid_at: date | None = None,
    ) -> Payment:
        if amount <= 0:
            raise ValidationError("payment amount must be positive")

        invoice = self.require_invoice(invoice_id)
        payment = Payment(
            invoice_id=invoice.id,
            amount=amount,
            method=method,
            reference=reference,
            notes=notes,
            paid_at=paid_at or date.today(),
        )
        self.db.add(payment)
        invoice.amount_paid = (invoice.amount_paid or 0) + amount
        if invoice_balance(invoice) <= 0:
            invoice.status = InvoiceStatus.PAID.value
        else:
            invoice.status = InvoiceStatus.PARTIALLY_PAID.value
        self.commit()
        self.db.refresh(payment)
        logger.info(
            "invoice.payment_recorded number=%s amount=%s status=%s",
            invoice.invoice_number,
            amount,
            invoice.status,
            extra={"event": "invoice.payment_recorded"},
        )
        return payment

    def create_service(self, name: str, rate: int, description: str | None = None, is_active: bool = True) -> Service:
        service = Service(name=name, rate=rate, description=description, is_active=is_active)
        self.db.add(service)
        self.commit()
        self.db.refresh(service)
        return service

    def list_services(self, active_only: bool = True) -> list[Service]:
        query = self.db.query(Service)
        if active_only:
            query = query.filter(Service.is_active.is_(True))
        return query.order_by(Service.name).all()
