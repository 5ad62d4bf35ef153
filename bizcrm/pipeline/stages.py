"""Kanban pipeline: stage buckets for leads and deals, and drag-drop moves.

Leads and deals share one set of six columns. Deals store the column id
directly in ``stage``; leads store a seven-value ``status`` that is folded onto
the columns through ``LEAD_STATUS_TO_STAGE``. Moving a lead back out of a
column goes through the separate ``STAGE_TO_LEAD_STATUS`` table, which picks
``qualified`` for the proposal column. A lead at ``proposal`` that leaves the
column and comes back therefore ends up ``qualified``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from bizcrm.core.enums import EntityKind, LeadStatus, PipelineStageId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineStage:
    id: str
    label: str


PIPELINE_STAGES: tuple[PipelineStage, ...] = (
    PipelineStage(PipelineStageId.NEW_LEAD.value, "New Lead"),
    PipelineStage(PipelineStageId.CONTACTED.value, "Contacted"),
    PipelineStage(PipelineStageId.PROPOSAL.value, "Proposal Sent"),
    PipelineStage(PipelineStageId.NEGOTIATION.value, "Negotiation"),
    PipelineStage(PipelineStageId.WON.value, "Won"),
    PipelineStage(PipelineStageId.LOST.value, "Lost"),
)
STAGE_IDS: tuple[str, ...] = tuple(stage.id for stage in PIPELINE_STAGES)

LEAD_STATUS_TO_STAGE = MappingProxyType(
    {
        LeadStatus.NEW.value: PipelineStageId.NEW_LEAD.value,
        LeadStatus.CONTACTED.value: PipelineStageId.CONTACTED.value,
        LeadStatus.QUALIFIED.value: PipelineStageId.PROPOSAL.value,
        LeadStatus.PROPOSAL.value: PipelineStageId.PROPOSAL.value,
        LeadStatus.NEGOTIATION.value: PipelineStageId.NEGOTIATION.value,
        LeadStatus.WON.value: PipelineStageId.WON.value,
        LeadStatus.LOST.value: PipelineStageId.LOST.value,
    }
)

# Written out on its own rather than inverted from the table above.
STAGE_TO_LEAD_STATUS = MappingProxyType(
    {
        PipelineStageId.NEW_LEAD.value: LeadStatus.NEW.value,
        PipelineStageId.CONTACTED.value: LeadStatus.CONTACTED.value,
        PipelineStageId.PROPOSAL.value: LeadStatus.QUALIFIED.value,
        PipelineStageId.NEGOTIATION.value: LeadStatus.NEGOTIATION.value,
        PipelineStageId.WON.value: LeadStatus.WON.value,
        PipelineStageId.LOST.value: LeadStatus.LOST.value,
    }
)


@dataclass(frozen=True)
class LeadCard:
    """A lead as shown on the board."""

    id: Any
    status: str
    name: str = ""
    company: str | None = None
    category: str | None = None
    value: int | None = None
    quality_score: int | None = None
    kind: str = field(default=EntityKind.LEAD.value, init=False)

    @property
    def title(self) -> str:
        return self.company or self.name

    @property
    def subtitle(self) -> str | None:
        return self.name if self.company else None

    @property
    def drag_id(self) -> str:
        return f"lead-{self.id}"


@dataclass(frozen=True)
class DealCard:
    """A deal as shown on the board."""

    id: Any
    stage: str
    title: str = ""
    value: int | None = None
    probability: int | None = None
    expected_close_date: str | None = None
    kind: str = field(default=EntityKind.DEAL.value, init=False)

    @property
    def drag_id(self) -> str:
        return f"deal-{self.id}"


PipelineEntity = Union[LeadCard, DealCard]


@dataclass(frozen=True)
class FieldUpdate:
    """A pending single-field write for the REST layer to send as a PATCH."""

    entity_kind: str
    entity_id: Any
    field: str
    value: str

    @property
    def resource_path(self) -> str:
        return f"/api/{self.entity_kind}s/{self.entity_id}"

    def as_patch(self) -> dict[str, str]:
        return {self.field: self.value}


@dataclass(frozen=True)
class StageBucket:
    stage: PipelineStage
    entities: tuple[PipelineEntity, ...] = ()

    @property
    def count(self) -> int:
        return len(self.entities)

    @property
    def total_value(self) -> int:
        return sum(entity.value or 0 for entity in self.entities)


def stage_of(entity: PipelineEntity) -> str | None:
    """Return the column an entity sits in, or None if it has no column."""
    if entity.kind == EntityKind.DEAL.value:
        return entity.stage if entity.stage in STAGE_IDS else None
    return LEAD_STATUS_TO_STAGE.get(entity.status)


def bucket_entities(leads: Iterable[LeadCard], deals: Iterable[DealCard]) -> dict[str, StageBucket]:
    """Group leads and deals into every column, leads first, source order kept.

    Entities whose status/stage maps to no column are left out of the board.
    """
    grouped: dict[str, list[PipelineEntity]] = {stage_id: [] for stage_id in STAGE_IDS}
    for entity in [*leads, *deals]:
        stage_id = stage_of(entity)
        if stage_id is None:
            logger.debug(
                "pipeline.bucket.unmapped kind=%s id=%s",
                entity.kind,
                entity.id,
                extra={"event": "pipeline.bucket.unmapped"},
            )
            continue
        grouped[stage_id].append(entity)

    return {stage.id: StageBucket(stage=stage, entities=tuple(grouped[stage.id])) for stage in PIPELINE_STAGES}


def apply_move(entity: PipelineEntity, target_stage: str) -> FieldUpdate | None:
    """Translate a drop onto ``target_stage`` into a field update.

    Returns None when nothing should be written: the entity is already in that
    column, or (for leads) the column has no lead status.
    """
    if target_stage == stage_of(entity):
        return None

    if entity.kind == EntityKind.DEAL.value:
        return FieldUpdate(entity_kind=entity.kind, entity_id=entity.id, field="stage", value=target_stage)

    new_status = STAGE_TO_LEAD_STATUS.get(target_stage)
    if new_status is None:
        return None
    return FieldUpdate(entity_kind=entity.kind, entity_id=entity.id, field="status", value=new_status)


def resolve_drop_target(over_id: str | None, over_entity: PipelineEntity | None = None) -> str | None:
    """Work out the column for a drop that landed on a column or on a card."""
    if over_id in STAGE_IDS:
        return over_id
    if over_entity is not None:
        return stage_of(over_entity)
    return None
