"""Pipeline board: stage lookup tables, bucketing and move translation."""

from bizcrm.pipeline.stages import (
    LEAD_STATUS_TO_STAGE,
    PIPELINE_STAGES,
    STAGE_IDS,
    STAGE_TO_LEAD_STATUS,
    DealCard,
    FieldUpdate,
    LeadCard,
    PipelineEntity,
    PipelineStage,
    StageBucket,
    apply_move,
    bucket_entities,
    resolve_drop_target,
    stage_of,
)

__all__ = [
    "DealCard",
    "FieldUpdate",
    "LEAD_STATUS_TO_STAGE",
    "LeadCard",
    "PIPELINE_STAGES",
    "PipelineEntity",
    "PipelineStage",
    "STAGE_IDS",
    "STAGE_TO_LEAD_STATUS",
    "StageBucket",
    "apply_move",
    "bucket_entities",
    "resolve_drop_target",
    "stage_of",
]
