"""
hifztrack Schemas - Pydantic models for the memorization tracker.

This module exports all schema classes for:
- Progress: stages, levels, line ranges, counter snapshots and decisions
- Settings: page geometry and repetition settings
"""

# Progress schemas
from .progress import (
    Stage,
    GroupLevel,
    StageKind,
    DecisionKind,
    StageLike,
    LevelLike,
    LINES_PER_BATCH,
    StageInfo,
    STAGE_INFO,
    coerce_stage,
    coerce_level,
    LineRange,
    LinePosition,
    ProgressSnapshot,
    ProgressDecision,
    PositionUpdate,
    TaskPlan,
)

# Settings schemas
from .settings import MemorizationSettings

__all__ = [
    # Progress
    'Stage',
    'GroupLevel',
    'StageKind',
    'DecisionKind',
    'StageLike',
    'LevelLike',
    'LINES_PER_BATCH',
    'StageInfo',
    'STAGE_INFO',
    'coerce_stage',
    'coerce_level',
    'LineRange',
    'LinePosition',
    'ProgressSnapshot',
    'ProgressDecision',
    'PositionUpdate',
    'TaskPlan',
    # Settings
    'MemorizationSettings',
]
