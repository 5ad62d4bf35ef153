from __future__ import annotations

import pytest

from bizcrm.core.exceptions import NotFoundError, ValidationError
from bizcrm.services.deal_service import DealService
from bizcrm.services.lead_service import LeadService
from bizcrm.services.pipeline_service import PipelineService


def _seed(session):
    leads = LeadService(db=session)
    deals = DealService(db=session)
    lead = leads.create_lead({"name": "Asha", "company": "Acme", "status": "proposal", "value": 1200})
    leads.create_lead({"name": "Stale", "status": "disqualified", "value": 50})
    deal = deals.create_deal(title="Acme rebrand", value=8000, stage="proposal")
    return lead, deal


def test_board_buckets_stored_rows(db_session):
    lead, deal = _seed(db_session)

    board = PipelineService(db=db_session).board()

    proposal = board["proposal"]
    assert [entity.drag_id for entity in proposal.entities] == [f"lead-{lead.id}", f"deal-{deal.id}"]
    assert proposal.total_value == 9200
    assert sum(bucket.count for bucket in board.values()) == 2


def test_move_lead_round_trip_persists_qualified(db_session):
    lead, _deal = _seed(db_session)
    service = PipelineService(db=db_session)

    first = service.move("lead", lead.id, "won")
    assert first.as_patch() == {"status": "won"}
    second = service.move("lead", lead.id, "proposal")
    assert second.as_patch() == {"status": "qualified"}

    stored = LeadService(db=db_session).get_lead(lead.id)
    assert stored.status == "qualified"


def test_move_to_same_column_writes_nothing(db_session):
    _lead, deal = _seed(db_session)
    service = PipelineService(db=db_session)

    assert service.move("deal", deal.id, "proposal") is None
    assert DealService(db=db_session).get_deal(deal.id).stage == "proposal"


def test_move_deal_updates_stage(db_session):
    _lead, deal = _seed(db_session)

    update = PipelineService(db=db_session).move("deal", deal.id, "negotiation")

    assert update.resource_path == f"/api/deals/{deal.id}"
    assert DealService(db=db_session).get_deal(deal.id).stage == "negotiation"


def test_move_missing_entity_raises(db_session):
    service = PipelineService(db=db_session)
    with pytest.raises(NotFoundError) as exc:
        service.move("lead", 404, "won")
    assert (exc.value.resource, exc.value.resource_id) == ("lead", 404)
    assert str(exc.value) == "lead 404 not found"
    with pytest.raises(NotFoundError):
        service.move("deal", 404, "won")


def test_move_unknown_kind_raises(db_session):
    with pytest.raises(ValidationError):
        PipelineService(db=db_session).move("contact", 1, "won")
