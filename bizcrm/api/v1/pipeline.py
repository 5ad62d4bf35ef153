"""Pipeline board and dashboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from bizcrm.core.dependencies import get_pipeline_service
from bizcrm.core.enums import EntityKind
from bizcrm.core.exceptions import NotFoundError, ValidationError
from bizcrm.pipeline import PipelineEntity, StageBucket
from bizcrm.reporting import dashboard_stats
from bizcrm.schemas.pipeline import (
    DashboardResponse,
    FieldUpdateResponse,
    PipelineCardResponse,
    PipelineColumnResponse,
    PipelineMoveRequest,
    PipelineMoveResponse,
)
from bizcrm.services.deal_service import DealService
from bizcrm.services.lead_service import LeadService
from bizcrm.services.pipeline_service import PipelineService

router = APIRouter(tags=["pipeline"])


def _card(entity: PipelineEntity, stage_id: str) -> PipelineCardResponse:
    card = PipelineCardResponse(
        kind=entity.kind,
        id=entity.id,
        drag_id=entity.drag_id,
        stage=stage_id,
        title=entity.title,
        value=entity.value,
    )
    if entity.kind == EntityKind.LEAD.value:
        card.subtitle = entity.subtitle
        card.category = entity.category
        card.quality_score = entity.quality_score
    else:
        card.probability = entity.probability
        card.expected_close_date = entity.expected_close_date
    return card


def _column(bucket: StageBucket) -> PipelineColumnResponse:
    return PipelineColumnResponse(
        stage=bucket.stage.id,
        label=bucket.stage.label,
        count=bucket.count,
        total_value=bucket.total_value,
        items=[_card(entity, bucket.stage.id) for entity in bucket.entities],
    )


@router.get("/pipeline", response_model=list[PipelineColumnResponse])
def get_pipeline(service: PipelineService = Depends(get_pipeline_service)) -> list[PipelineColumnResponse]:
    return [_column(bucket) for bucket in service.board().values()]


@router.post("/pipeline/move", response_model=PipelineMoveResponse)
def move_card(
    payload: PipelineMoveRequest,
    service: PipelineService = Depends(get_pipeline_service),
) -> PipelineMoveResponse:
    try:
        update = service.move(payload.kind.value, payload.id, payload.target_stage.value)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    if update is None:
        return PipelineMoveResponse(status="noop")
    return PipelineMoveResponse(
        status="moved",
        update=FieldUpdateResponse(
            entity_kind=update.entity_kind,
            entity_id=update.entity_id,
            field=update.field,
            value=update.value,
            resource_path=update.resource_path,
        ),
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(service: PipelineService = Depends(get_pipeline_service)) -> DashboardResponse:
    leads = LeadService(db=service.db).list_leads()
    deals = DealService(db=service.db).list_deals()
    stats = dashboard_stats(leads, deals)
    return DashboardResponse(
        total_leads=stats.total_leads,
        total_deals=stats.total_deals,
        won_revenue=stats.won_revenue,
        new_leads=stats.new_leads,
        conversion_rate=stats.conversion_rate,
    )
