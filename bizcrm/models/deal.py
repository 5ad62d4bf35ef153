"""Deal model module."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizcrm.core.enums import PipelineStageId
from bizcrm.models.base import AuditMixin, Base


class Deal(Base, AuditMixin):
    __tablename__ = "deals"
    __table_args__ = (Index("idx_deals_stage", "stage"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lead_id: Mapped[int | None] = mapped_column(ForeignKey("leads.id", ondelete="SET NULL"))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[int | None] = mapped_column(Integer, default=0)
    stage: Mapped[str] = mapped_column(String(40), default=PipelineStageId.NEW_LEAD.value, nullable=False)
    probability: Mapped[int | None] = mapped_column(Integer, default=10)
    expected_close_date: Mapped[str | None] = mapped_column(String(10))
    notes: Mapped[str | None] = mapped_column(Text)
    assigned_to: Mapped[str | None] = mapped_column(String(255))
