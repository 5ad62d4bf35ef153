"""Lead service for CRUD and status changes."""

from __future__ import annotations

from typing import Any

from bizcrm.core.enums import LeadStatus
from bizcrm.models import Lead
from bizcrm.services.base_service import BaseService


class LeadService(BaseService):
    """Service for lead CRUD and status transitions."""

    def create_lead(self, data: dict[str, Any]) -> Lead:
        payload = dict(data)
        payload.setdefault("status", LeadStatus.NEW.value)
        lead = Lead(**payload)
        self.db.add(lead)
        self.commit()
        self.db.refresh(lead)
        return lead

    def get_lead(self, lead_id: int) -> Lead | None:
        return self.db.query(Lead).filter(Lead.id == lead_id).first()

    def list_leads(self) -> list[Lead]:
        return self.db.query(Lead).order_by(Lead.id).all()

    def list_by_status(self, status: str) -> list[Lead]:
        return self.db.query(Lead).filter(Lead.status == status).order_by(Lead.id).all()

    def update_status(self, lead_id: int, status: str) -> Lead | None:
        lead = self.get_lead(lead_id)
        if lead is None:
            return None

        lead.status = status
        self.commit()
        self.db.refresh(lead)
        return lead
