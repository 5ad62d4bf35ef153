from __future__ import annotations

from bizcrm.core.enums import LeadStatus, PipelineStageId
from bizcrm.services.deal_service import DealService
from bizcrm.services.lead_service import LeadService


def test_create_and_update_lead_status(db_session):
    service = LeadService(db=db_session)
    lead = service.create_lead({"name": "Ari", "email": "ari@example.com"})
    assert lead.status == LeadStatus.NEW.value

    updated = service.update_status(lead.id, LeadStatus.CONTACTED.value)
    assert updated.status == LeadStatus.CONTACTED.value
    assert [row.id for row in service.list_by_status("contacted")] == [lead.id]


def test_update_missing_lead_returns_none(db_session):
    assert LeadService(db=db_session).update_status(42, "won") is None


def test_create_and_update_deal_stage(db_session):
    service = DealService(db=db_session)
    deal = service.create_deal(title="Annual retainer", value=12000)
    assert deal.stage == PipelineStageId.NEW_LEAD.value
    assert deal.probability == 10

    updated = service.update_stage(deal.id, PipelineStageId.WON.value)
    assert updated.stage == "won"
    assert [row.id for row in service.list_by_stage("won")] == [deal.id]
    assert service.update_stage(999, "won") is None
