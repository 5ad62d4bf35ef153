"""Modular SQLAlchemy model package for the CRM schema."""

from bizcrm.models.base import Base
from bizcrm.models.deal import Deal
from bizcrm.models.invoice import Invoice, InvoiceItem, Payment
from bizcrm.models.lead import Lead
from bizcrm.models.service import Service

__all__ = [
    "Base",
    "Deal",
    "Invoice",
    "InvoiceItem",
    "Lead",
    "Payment",
    "Service",
]
