"""Invoice, line item and payment model module."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizcrm.core.enums import DiscountType, InvoiceStatus, PaymentMethod
from bizcrm.models.base import AuditMixin, Base


class Invoice(Base, AuditMixin):
    __tablename__ = "invoices"
    __table_args__ = (Index("idx_invoices_status", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    invoice_number: Mapped[str | None] = mapped_column(String(64), unique=True)
    lead_id: Mapped[int | None] = mapped_column(ForeignKey("leads.id", ondelete="SET NULL"))
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_email: Mapped[str | None] = mapped_column(String(320))
    client_phone: Mapped[str | None] = mapped_column(String(40))
    client_address: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(40), default=InvoiceStatus.DRAFT.value, nullable=False)
    discount_type: Mapped[str] = mapped_column(String(20), default=DiscountType.PERCENTAGE.value, nullable=False)
    discount_value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tax_percentage: Mapped[int] = mapped_column(Integer, default=18, nullable=False)
    # Snapshot of the totals at save time; not recomputed afterwards.
    subtotal: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    amount_paid: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(Text)

    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )
    payments = relationship("Payment", back_populates="invoice", cascade="all, delete-orphan")


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    rate: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    invoice = relationship("Invoice", back_populates="items")


class Payment(Base, AuditMixin):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    method: Mapped[str] = mapped_column(String(40), default=PaymentMethod.BANK_TRANSFER.value, nullable=False)
    reference: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)
    paid_at: Mapped[date | None] = mapped_column(Date)

    invoice = relationship("Invoice", back_populates="payments")
