"""Deal service for CRUD and stage changes."""

from __future__ import annotations

from bizcrm.core.enums import PipelineStageId
from bizcrm.models import Deal
from bizcrm.services.base_service import BaseService


class DealService(BaseService):
    """Service for deal CRUD and stage transitions."""

    def create_deal(
        self,
        title: str,
        value: int = 0,
        stage: str | None = None,
        probability: int = 10,
        lead_id: int | None = None,
        expected_close_date: str | None = None,
        notes: str | None = None,
    ) -> Deal:
        deal = Deal(
            title=title,
            value=value,
            stage=stage or PipelineStageId.NEW_LEAD.value,
            probability=probability,
            lead_id=lead_id,
            expected_close_date=expected_close_date,
            notes=notes,
        )
        self.db.add(deal)
        self.commit()
        self.db.refresh(deal)
        return deal

    def get_deal(self, deal_id: int) -> Deal | None:
        return self.db.query(Deal).filter(Deal.id == deal_id).first()

    def list_deals(self) -> list[Deal]:
        return self.db.query(Deal).order_by(Deal.id).all()

    def list_by_stage(self, stage: str) -> list[Deal]:
        return self.db.query(Deal).filter(Deal.stage == stage).order_by(Deal.id).all()

    def update_stage(self, deal_id: int, new_stage: str) -> Deal | None:
        deal = self.get_deal(deal_id)
        if deal is None:
            return None

        deal.stage = new_stage
        self.commit()
        self.db.refresh(deal)
        return deal
