"""Enums for the bizcrm application.

Values are the lowercase wire strings stored in the database and sent over
the API, so members compare equal to plain strings.
"""

from __future__ import annotations

import enum


class LeadStatus(str, enum.Enum):
    """Status of a lead. Seven values, folded onto six pipeline stages."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"


class PipelineStageId(str, enum.Enum):
    """Kanban column identifiers, in display order."""

    NEW_LEAD = "new_lead"
    CONTACTED = "contacted"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"


class EntityKind(str, enum.Enum):
    """Discriminator for entities shown on the pipeline board."""

    LEAD = "lead"
    DEAL = "deal"


class DiscountType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class InvoiceStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CASH = "cash"
    CHEQUE = "cheque"
    CARD = "card"
    OTHER = "other"
