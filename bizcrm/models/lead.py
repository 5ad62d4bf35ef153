"""Lead model module."""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizcrm.core.enums import LeadStatus
from bizcrm.models.base import AuditMixin, Base


class Lead(Base, AuditMixin):
    __tablename__ = "leads"
    __table_args__ = (Index("idx_leads_status", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(40))
    company: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(120))
    # Plain string so rows with legacy or unknown statuses still load.
    status: Mapped[str] = mapped_column(String(40), default=LeadStatus.NEW.value, nullable=False)
    value: Mapped[int | None] = mapped_column(Integer)
    lead_quality_score: Mapped[int | None] = mapped_column(Integer)
