"""Pipeline board request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bizcrm.core.enums import EntityKind, PipelineStageId


class PipelineMoveRequest(BaseModel):
    kind: EntityKind
    id: int = Field(ge=1)
    target_stage: PipelineStageId


class FieldUpdateResponse(BaseModel):
    entity_kind: str
    entity_id: int
    field: str
    value: str
    resource_path: str


class PipelineMoveResponse(BaseModel):
    status: str
    update: FieldUpdateResponse | None = None


class PipelineCardResponse(BaseModel):
    kind: str
    id: int
    drag_id: str
    stage: str
    title: str
    subtitle: str | None = None
    category: str | None = None
    value: int | None = None
    quality_score: int | None = None
    probability: int | None = None
    expected_close_date: str | None = None


class PipelineColumnResponse(BaseModel):
    stage: str
    label: str
    count: int
    total_value: int
    items: list[PipelineCardResponse]


class DashboardResponse(BaseModel):
    total_leads: int
    total_deals: int
    won_revenue: int
    new_leads: int
    conversion_rate: int
