"""Pipeline board service: reads stored leads/deals and writes card moves."""

from __future__ import annotations

import logging

from bizcrm.core.enums import EntityKind
from bizcrm.core.exceptions import NotFoundError, ValidationError
from bizcrm.models import Deal, Lead
from bizcrm.pipeline import DealCard, FieldUpdate, LeadCard, StageBucket, apply_move, bucket_entities
from bizcrm.services.base_service import BaseService
from bizcrm.services.deal_service import DealService
from bizcrm.services.lead_service import LeadService

logger = logging.getLogger(__name__)


def lead_card(lead: Lead) -> LeadCard:
    return LeadCard(
        id=lead.id,
        status=lead.status,
        name=lead.name,
        company=lead.company,
        category=lead.category,
        value=lead.value,
        quality_score=lead.lead_quality_score,
    )


def deal_card(deal: Deal) -> DealCard:
    return DealCard(
        id=deal.id,
        stage=deal.stage,
        title=deal.title,
        value=deal.value,
        probability=deal.probability,
        expected_close_date=deal.expected_close_date,
    )


class PipelineService(BaseService):
    """Builds the kanban board and persists drag-drop moves."""

    def board(self) -> dict[str, StageBucket]:
        leads = [lead_card(row) for row in LeadService(db=self.db).list_leads()]
        deals = [deal_card(row) for row in DealService(db=self.db).list_deals()]
        return bucket_entities(leads, deals)

    def move(self, kind: str, entity_id: int, target_stage: str) -> FieldUpdate | None:
        """Move one card to ``target_stage``; returns the write made, or None for a no-op."""
        if kind == EntityKind.LEAD.value:
            lead_service = LeadService(db=self.db)
            row = lead_service.get_lead(entity_id)
            if row is None:
                raise NotFoundError(EntityKind.LEAD.value, entity_id)
            update = apply_move(lead_card(row), target_stage)
            if update is not None:
                lead_service.update_status(entity_id, update.value)
        elif kind == EntityKind.DEAL.value:
            deal_service = DealService(db=self.db)
            row = deal_service.get_deal(entity_id)
            if row is None:
                raise NotFoundError(EntityKind.DEAL.value, entity_id)
            update = apply_move(deal_card(row), target_stage)
            if update is not None:
                deal_service.update_stage(entity_id, update.value)
        else:
            raise ValidationError(f"unsupported pipeline entity kind: {kind}")

        if update is None:
            logger.info(
                "pipeline.move.noop kind=%s id=%s target=%s",
                kind,
                entity_id,
                target_stage,
                extra={"event": "pipeline.move.noop"},
            )
        else:
            logger.info(
                "pipeline.move.applied %s %s",
                update.resource_path,
                update.as_patch(),
                extra={"event": "pipeline.move.applied"},
            )
        return update
