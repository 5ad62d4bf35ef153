from __future__ import annotations

import bizcrm.api.v1.health as health_module
from bizcrm.services.deal_service import DealService
from bizcrm.services.lead_service import LeadService


def _seed(session_factory):
    session = session_factory()
    try:
        lead = LeadService(db=session).create_lead(
            {"name": "Asha", "company": "Acme", "status": "qualified", "value": 1000, "category": "retail"}
        )
        LeadService(db=session).create_lead({"name": "Ravi", "status": "new"})
        deal = DealService(db=session).create_deal(title="Acme rebrand", value=5000, stage="won", probability=90)
        return lead.id, deal.id
    finally:
        session.close()


def test_health_reports_database_state(client, monkeypatch):
    monkeypatch.setattr(health_module, "verify_database_connection", lambda: False)

    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "bizcrm"
    assert body["database"] == "unreachable"


def test_pipeline_returns_six_columns(client, session_factory):
    lead_id, deal_id = _seed(session_factory)

    response = client.get("/api/v1/pipeline")

    assert response.status_code == 200
    columns = response.json()
    assert [column["stage"] for column in columns] == [
        "new_lead",
        "contacted",
        "proposal",
        "negotiation",
        "won",
        "lost",
    ]
    proposal = columns[2]
    assert proposal["label"] == "Proposal Sent"
    assert proposal["count"] == 1
    assert proposal["items"][0]["drag_id"] == f"lead-{lead_id}"
    assert proposal["items"][0]["title"] == "Acme"
    assert proposal["items"][0]["subtitle"] == "Asha"
    won = columns[4]
    assert won["total_value"] == 5000
    assert won["items"][0]["drag_id"] == f"deal-{deal_id}"
    assert won["items"][0]["probability"] == 90


def test_move_lead_into_proposal_writes_qualified(client, session_factory):
    lead_id, _deal_id = _seed(session_factory)

    moved = client.post("/api/v1/pipeline/move", json={"kind": "lead", "id": lead_id, "target_stage": "won"})
    assert moved.status_code == 200
    assert moved.json()["update"]["value"] == "won"

    back = client.post("/api/v1/pipeline/move", json={"kind": "lead", "id": lead_id, "target_stage": "proposal"})
    body = back.json()
    assert body["status"] == "moved"
    assert body["update"] == {
        "entity_kind": "lead",
        "entity_id": lead_id,
        "field": "status",
        "value": "qualified",
        "resource_path": f"/api/leads/{lead_id}",
    }


def test_move_to_current_column_is_noop(client, session_factory):
    _lead_id, deal_id = _seed(session_factory)

    response = client.post("/api/v1/pipeline/move", json={"kind": "deal", "id": deal_id, "target_stage": "won"})

    assert response.status_code == 200
    assert response.json() == {"status": "noop", "update": None}


def test_move_rejects_unknown_column_and_missing_card(client, session_factory):
    _seed(session_factory)

    bad_stage = client.post("/api/v1/pipeline/move", json={"kind": "deal", "id": 1, "target_stage": "archived"})
    assert bad_stage.status_code == 422

    missing = client.post("/api/v1/pipeline/move", json={"kind": "lead", "id": 999, "target_stage": "won"})
    assert missing.status_code == 404


def test_dashboard_stats(client, session_factory):
    _seed(session_factory)

    body = client.get("/api/v1/dashboard").json()

    assert body == {
        "total_leads": 2,
        "total_deals": 1,
        "won_revenue": 5000,
        "new_leads": 1,
        "conversion_rate": 50,
    }
